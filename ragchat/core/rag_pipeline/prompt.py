"""
RAG answer prompt.

Dependencies: langchain_core.prompts
System role: Prompt template for context-grounded answers
"""

from langchain_core.prompts import ChatPromptTemplate

SYSTEM_PROMPT = """You are a knowledgeable assistant. Use ONLY the provided context to answer.
If the context does not contain the answer, say that you don't know."""

RAG_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", """Context:
{context}

Question:
{input}"""),
])
