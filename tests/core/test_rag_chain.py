"""
Test suite for the LCEL retrieval chain and prompt.

Uses LangChain's in-memory vector store with deterministic fake embeddings
and a fake chat model, so no provider is called.

System role: Verification of retrieval + generation wiring
"""

import pytest
from langchain_core.documents import Document
from langchain_core.embeddings import DeterministicFakeEmbedding
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.vectorstores import InMemoryVectorStore

from ragchat.core.rag_pipeline.chain import (
    DEMO_ANSWER_PREFIX,
    build_answer_chain,
    build_demo_answer_chain,
    build_retrieval_chain,
    format_documents,
)
from ragchat.core.rag_pipeline.prompt import RAG_PROMPT


@pytest.fixture
def retriever():
    """Provide retriever over three small documents."""
    store = InMemoryVectorStore(embedding=DeterministicFakeEmbedding(size=16))
    store.add_documents(
        [
            Document(page_content="Paris is the capital of France.", metadata={"id": "geo", "chunk_index": 0}),
            Document(page_content="The Seine flows through Paris.", metadata={"id": "geo", "chunk_index": 1}),
            Document(page_content="Bananas are rich in potassium.", metadata={"id": "food", "chunk_index": 0}),
        ]
    )
    return store.as_retriever(search_kwargs={"k": 2})


class TestRetrievalChain:
    """Test suite for build_retrieval_chain."""

    @pytest.mark.asyncio
    async def test_chain_should_return_input_context_and_answer(self, retriever) -> None:
        # Arrange
        llm = FakeListChatModel(responses=["Paris"])
        chain = build_retrieval_chain(retriever, build_answer_chain(llm))

        # Act
        result = await chain.ainvoke({"input": "What is the capital of France?"})

        # Assert
        assert result["answer"] == "Paris"
        assert result["input"] == "What is the capital of France?"
        assert len(result["context"]) == 2
        assert all(isinstance(doc, Document) for doc in result["context"])

    @pytest.mark.asyncio
    async def test_demo_chain_should_echo_query(self, retriever) -> None:
        chain = build_retrieval_chain(retriever, build_demo_answer_chain())

        result = await chain.ainvoke({"input": "hello there"})

        assert result["answer"] == f"{DEMO_ANSWER_PREFIX}hello there"

    def test_demo_answer_should_truncate_long_query(self, retriever) -> None:
        chain = build_retrieval_chain(retriever, build_demo_answer_chain())

        result = chain.invoke({"input": "q" * 500})

        assert result["answer"] == DEMO_ANSWER_PREFIX + "q" * 200


class TestPrompt:
    """Test suite for prompt formatting."""

    def test_prompt_should_expect_context_and_input(self) -> None:
        assert sorted(RAG_PROMPT.input_variables) == ["context", "input"]

    def test_format_documents_should_join_page_contents(self) -> None:
        docs = [Document(page_content="first"), Document(page_content="second")]

        assert format_documents(docs) == "first\n\nsecond"

    def test_prompt_should_include_context_and_question(self) -> None:
        messages = RAG_PROMPT.format_messages(context="Some context", input="Some question")

        rendered = messages[-1].content
        assert "Some context" in rendered
        assert "Some question" in rendered
