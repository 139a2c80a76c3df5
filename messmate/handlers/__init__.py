"""Handlers package - Telegram bot feature plugins."""


def format_error_message(emoji: str, problem: str, action: str) -> str:
    """
    Format error messages following the pattern: [emoji] [problem] [action].

    Args:
        emoji: Visual indicator (e.g., "❌", "⚠️", "📍")
        problem: Clear description of what went wrong
        action: Suggested next step for the user

    Returns:
        Formatted error message string

    Example:
        >>> format_error_message("❌", "Listing not found.", "Browse with /discover")
        "❌ Listing not found.\n\nBrowse with /discover"
    """
    return f"{emoji} {problem}\n\n{action}"


ERROR_TEMPLATES = {
    "listing_not_found": lambda: format_error_message(
        "❌",
        "Mess service not found.",
        "It may have been removed. Browse others with /discover"
    ),
    "invalid_input": lambda field, requirement: format_error_message(
        "❌",
        f"Invalid {field}.",
        f"{requirement}. Please try again."
    ),
    "review_usage": lambda: format_error_message(
        "ℹ️",
        "Usage: /review <listing_id> <rating 1-5> [comment]",
        "Find listing IDs with /discover"
    ),
    "reviews_usage": lambda: format_error_message(
        "ℹ️",
        "Usage: /reviews <listing_id>",
        "Find listing IDs with /discover"
    ),
    "filter_usage": lambda usage, example: format_error_message(
        "ℹ️",
        f"Usage: {usage}",
        f"Example: {example}"
    ),
    "no_results": lambda: format_error_message(
        "😔",
        "No mess services found.",
        "Try adjusting your search or filters."
    ),
    "invalid_request": lambda: format_error_message(
        "❌",
        "Invalid request.",
        "Start again with /discover"
    ),
}
