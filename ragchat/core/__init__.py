"""Core domain logic: chunking, error taxonomy, RAG pipeline."""
