"""LLM prompts for search summarization."""


def get_summary_prompt(query: str, context: str) -> str:
    """Generate the summarization prompt for a query and its source context."""
    return f"""The user asked the following question: "{query}"

Based on this question, summarize the following information in a structured format:

{context}

Please format your response as follows:
- Begin with a direct answer to the user's question.
- Use double line breaks to separate main sections.
- Start each section with a title on its own line.
- Use **bold** for important points.
- Use *italic* for emphasis.
- Use - at the start of a line for list items.
- Aim for 3-4 main sections in your summary.
- Ensure that your summary is focused on answering the user's original question."""
