"""
LCEL retrieval chain.

Retrieves context documents for `input`, then runs an answer chain over them.
The chain output is a dict with `input`, `context` (retrieved Documents) and
`answer`. The demo answer chain replaces the LLM in mock mode.

Dependencies: langchain_core.runnables, langchain_core.output_parsers
System role: Retrieval + generation pipeline
"""

from operator import itemgetter
from typing import Any

from langchain_core.documents import Document
from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.retrievers import BaseRetriever
from langchain_core.runnables import Runnable, RunnableLambda, RunnablePassthrough

from ragchat.core.rag_pipeline.prompt import RAG_PROMPT

DEMO_ANSWER_PREFIX = "DEMO: no API key provided or mock mode enabled. Received query: "
DEMO_QUERY_PREVIEW_CHARS = 200


def format_documents(documents: list[Document]) -> str:
    """Join retrieved chunk texts into one context block."""
    return "\n\n".join(doc.page_content for doc in documents)


def _prompt_inputs(inputs: dict[str, Any]) -> dict[str, str]:
    return {
        "context": format_documents(inputs.get("context") or []),
        "input": inputs["input"],
    }


def build_answer_chain(
    llm: BaseChatModel,
    prompt: ChatPromptTemplate = RAG_PROMPT,
) -> Runnable:
    """
    Build the chain that stuffs retrieved documents into the prompt.

    Args:
        llm: Chat model generating the answer
        prompt: Prompt with `context` and `input` variables

    Returns:
        Runnable: {"input", "context"} -> answer string
    """
    return RunnableLambda(_prompt_inputs) | prompt | llm | StrOutputParser()


def demo_answer(inputs: dict[str, Any]) -> str:
    """Deterministic stand-in answer echoing the query."""
    return f"{DEMO_ANSWER_PREFIX}{str(inputs['input'])[:DEMO_QUERY_PREVIEW_CHARS]}"


def build_demo_answer_chain() -> Runnable:
    """Answer chain used in mock mode; never calls a model."""
    return RunnableLambda(demo_answer)


def build_retrieval_chain(retriever: BaseRetriever, answer_chain: Runnable) -> Runnable:
    """
    Compose retrieval and answer generation.

    Args:
        retriever: Returns relevant Documents for a query string
        answer_chain: Turns {"input", "context"} into an answer string

    Returns:
        Runnable: {"input": str} -> {"input", "context", "answer"}
    """
    retrieve_context = itemgetter("input") | retriever
    return RunnablePassthrough.assign(context=retrieve_context).assign(answer=answer_chain)
