"""
Prompt templates for the LLM-backed paths.

The complexity prompt asks for the same seven fields the heuristic
classifier returns, so both backends are interchangeable.
"""


SYSTEM_PROMPT = """You are a concise code-complexity analyzer. Respond with a single valid JSON object and nothing else. Do NOT use markdown, do NOT wrap the JSON in backticks, and do NOT add any explanation before or after the JSON."""


def build_analysis_prompt(code: str) -> str:
    """
    Build the complexity prompt for the LLM.

    Args:
        code: Source code to analyze

    Returns:
        Formatted prompt string
    """
    return f"""Analyze the following code and return a JSON object with these fields:
- timeComplexity (string, e.g., 'O(log n)')
- timeComplexityType (one of: constant, logarithmic, linear, linearithmic, quadratic, exponential)
- timeExplanation (short, 1-2 sentences)
- spaceComplexity (string, e.g., 'O(1)')
- spaceComplexityType (same taxonomy as time)
- spaceExplanation (short)
- codeRating (integer 1..5)

Respond ONLY with valid JSON. Do not include any extra commentary, markdown, or backticks. The response MUST start with '{{' and end with '}}'.

Code:

{code}
"""


REVIEW_SYSTEM_PROMPT = """You are a senior code reviewer. Analyze JavaScript/TypeScript/React code for bugs, code smells, complexity, and maintainability. Respond in strict JSON."""


def build_review_prompt(code: str, file_path: str, chunk_index: int, total_chunks: int) -> str:
    """Build the review prompt for one chunk of a source file."""
    return f"""File: {file_path}
Chunk: {chunk_index + 1}/{total_chunks}

Please provide:
- issues: array of {{ type: 'bug'|'complexity'|'smell'|'security'|'style', severity: 'low'|'medium'|'high', message: string, lineHint?: string }}
- summary: short string
- recommended_actions: short array of strings

Code:

{code}
"""
