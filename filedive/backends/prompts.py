"""Prompt templates shared by all hosted-model providers."""

from __future__ import annotations

import json

NO_RESULTS = "No relevant content found."

CONTENT_SEARCH_PROMPT = """\
You are an expert search assistant. Given a file content and a search query, \
find the most relevant search results from the file content, accounting for \
potential typos, fuzzy matching, and the following search operators:

- Quotation marks ("): Force an exact match of the phrase within the quotes.
- Asterisk (*): Use as a wildcard to represent any word or set of words.
- Tilde (~): Search for the term followed by synonyms.
- Minus sign (-): Exclude results containing the word following the minus sign.

Many punctuation marks are ignored, like commas, periods, and semicolons. \
Focus on the words around them.

If no relevant content is found, you MUST return "{no_results}"
DO NOT include surrounding context, and be concise.

File Name: {file_name}
File Content: {file_content}
Search Query: {query}

Respond with valid JSON in this exact format:
{{"search_results": "the relevant search results"}}\
"""

SEMANTIC_FILTER_PROMPT = """\
You are an expert search assistant specializing in semantic search.
Given a list of file titles and a search query, identify the file titles that \
are most relevant to the intent of the query.

Return an array of the relevant file titles. If no relevant content is found, \
return an empty array.

File Titles: {file_titles}
Search Query: {query}

Respond with valid JSON in this exact format:
{{"relevant_file_titles": ["title"]}}\
"""

# Gemini structured-output schemas for the two answers above.
CONTENT_SEARCH_SCHEMA = {
    "type": "OBJECT",
    "properties": {"search_results": {"type": "STRING"}},
    "required": ["search_results"],
}

SEMANTIC_FILTER_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "relevant_file_titles": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["relevant_file_titles"],
}


def content_search_prompt(query: str, file_content: str, file_name: str | None = None) -> str:
    return CONTENT_SEARCH_PROMPT.format(
        no_results=NO_RESULTS,
        file_name=file_name or "",
        file_content=file_content,
        query=query,
    )


def semantic_filter_prompt(query: str, file_titles: list[str]) -> str:
    return SEMANTIC_FILTER_PROMPT.format(
        file_titles=json.dumps(file_titles, ensure_ascii=False),
        query=query,
    )
