"""Prompt prefixes that steer the OpenCode agent."""

OPENCODE_SYSTEM_PROMPT = (
    "You are an AI coding assistant powered by OpenCode. "
    "Use the available tools to read, write, and modify files. "
    "When editing files, prefer using the edit tool over shell commands. "
    "Always verify your changes and provide clear explanations."
)

OPENCODE_FILE_EDIT_PROMPT = (
    "For file operations, use the built-in file tools directly. "
    "Do not use shell redirection or heredoc to write files. "
    "Use the edit tool for precise modifications."
)


def prepend_opencode_system_prompt(prompt: str) -> str:
    """Prefix the prompt with the OpenCode system guidance."""
    return f"<system>{OPENCODE_SYSTEM_PROMPT}</system>\n\n{prompt}"


def prepend_opencode_file_edit_prompt(prompt: str) -> str:
    """Prefix the prompt with file-editing guidance."""
    return f"<system>{OPENCODE_FILE_EDIT_PROMPT}</system>\n\n{prompt}"


def prepend_opencode_full_prompt(prompt: str) -> str:
    """Prefix the prompt with both the system and file-editing guidance."""
    return (
        f"<system>{OPENCODE_SYSTEM_PROMPT}\n\n{OPENCODE_FILE_EDIT_PROMPT}</system>"
        f"\n\n{prompt}"
    )