"""Plain-text rendering of an Analysis for the command line."""

from src.modules.signals.analysis import Analysis

NO_RECOMMENDATION = "No recommendation can be made."


def format_report(analysis: Analysis, ticker: str | None = None) -> str:
    """Render the rating and notes as a short text report.

    Args:
        analysis: Result of a signal policy run.
        ticker: Optional symbol shown in the header.

    Returns:
        "No recommendation can be made." when no signal fired, otherwise
        the rating (2 decimals) followed by one bullet per note.
    """
    header = f"{ticker.upper()}\n\n" if ticker else ""
    if not analysis.has_recommendation:
        return f"{header}{NO_RECOMMENDATION}"

    lines = [f"{header}Rating: {analysis.rating:.2f}", "", "Notes"]
    lines.extend(f"- {note}" for note in analysis.notes)
    return "\n".join(lines)
