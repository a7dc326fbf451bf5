"""
ragchat: retrieval-augmented chat backend.

Ingests documents as overlapping text chunks into a vector store and answers
questions with a LangChain retrieval chain.
"""

__version__ = "0.1.0"
