"""
Prompts sent to the text-generation service
"""


def format_subtask_prompt(task: str) -> str:
    """
    Format the prompt asking for a task to be split into three subtasks.

    Args:
        task: The to-do text to break down

    Returns:
        Formatted prompt string
    """
    return f"""Break down the following task into exactly 3 simpler subtasks. Return only the 3 subtasks, one per line. No numbering, bullets, or extra text.

Task: {task}"""
