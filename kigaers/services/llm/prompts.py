DEFAULT_TITLE = "the provided paper"


def summary_prompt(content: str, title: str | None = None) -> str:
    """Prompt for a comprehensive, accessible summary of a paper."""
    title = title or DEFAULT_TITLE
    return (
        "You are an expert at analyzing academic papers and summarizing them concisely and accurately.\n"
        f"Write a comprehensive summary of the paper \"{title}\" that makes clear its main goal, "
        "the methods used, the key results, and its most important contribution or novelty.\n"
        "Briefly explain technical terms so that researchers and students from other fields can follow. "
        "Scale the length to the complexity of the paper, keeping it as short as possible without "
        "dropping important information.\n\n"
        "Paper content:\n"
        f"{content}"
    )


def question_prompt(content: str, question: str, title: str | None = None) -> str:
    """Prompt for answering a question strictly from the paper's text."""
    title = title or DEFAULT_TITLE
    return (
        "You are an assistant that understands the provided academic paper in depth and answers "
        "questions about it accurately and specifically, based only on the paper.\n"
        f"Using the content of the paper \"{title}\", answer the question below.\n\n"
        f"Question: \"{question}\"\n\n"
        "Capture the intent of the question, refer to the relevant parts of the paper, and be clear "
        "and concise. If the paper does not contain a direct answer, say so honestly. Do not speculate "
        "or use information from outside the paper.\n\n"
        "Paper content:\n"
        f"{content}"
    )
