"""
helpers.py - UI helper functions
Single responsibility: small formatting helpers and error reporting used across UI.
"""
import logging
from datetime import date, datetime

import flet as ft

from ids_manager.config import (
    COLOR_DANGER,
    COLOR_DONE,
    COLOR_PENDING,
    COLOR_PROGRESS,
    COLOR_TEXT_MAIN,
    COLOR_TEXT_MUTED,
    COLOR_WARNING,
)
from ids_manager.database.repositories.tags import normalize_tags
from ids_manager.domain.errors import ErrorKind, IdsError, user_message

logger = logging.getLogger(__name__)

_STATUS_COLORS = {
    "pending": COLOR_PENDING,
    "discussed": COLOR_PROGRESS,
    "in_progress": COLOR_PROGRESS,
    "in_review": COLOR_PROGRESS,
    "completed": COLOR_DONE,
    "solved": COLOR_DONE,
    "implemented": COLOR_DONE,
    "rejected": COLOR_DANGER,
}


def format_datetime(iso_str: str) -> str:
    """ISO 8601 string to "YYYY-MM-DD HH:MM"; fallback to raw on error."""
    try:
        dt = datetime.fromisoformat(iso_str)
        return dt.strftime("%Y-%m-%d %H:%M")
    except (ValueError, TypeError):
        return iso_str or ""


def status_color(status: str) -> str:
    return _STATUS_COLORS.get(status, COLOR_TEXT_MUTED)


def status_label(status: str) -> str:
    return (status or "").replace("_", " ").title()


def parse_tags(text: str | None) -> list[str]:
    """Split comma/newline-separated tags; blanks and duplicates are dropped."""
    if not text:
        return []
    return normalize_tags(text.replace("\n", ",").split(","))


def remaining_days_text(due_date_str: str | None):
    try:
        d = date.fromisoformat(due_date_str) if due_date_str else None
    except ValueError:
        d = None
    if not d:
        return "No due date", COLOR_TEXT_MUTED
    delta = (d - date.today()).days
    if delta > 0:
        return f"{delta} days left", COLOR_TEXT_MAIN
    if delta == 0:
        return "Due today", COLOR_DANGER
    return f"{abs(delta)} days overdue", COLOR_DANGER


def show_snack(page: ft.Page, message: str, color: str | None = None) -> None:
    snack = ft.SnackBar(ft.Text(message, color="white"), bgcolor=color)
    page.overlay.append(snack)
    snack.open = True
    page.update()


def show_error_dialog(page: ft.Page, title: str, exc: Exception) -> None:
    page.overlay.append(
        ft.AlertDialog(
            title=ft.Text(title),
            content=ft.Text(f"Details: {exc}"),
            open=True,
        )
    )
    page.update()


def report_error(page: ft.Page, error: IdsError) -> None:
    """Show a service error as a snack bar coloured by its kind."""
    if error.kind in (
        ErrorKind.UNAUTHENTICATED,
        ErrorKind.ACCESS_DENIED,
        ErrorKind.INVALID_TRANSITION,
    ):
        color = COLOR_WARNING
    elif error.kind is ErrorKind.NOT_FOUND:
        color = COLOR_TEXT_MUTED
    elif error.kind in (ErrorKind.STORE_ERROR, ErrorKind.HISTORY_WRITE_FAILED):
        color = COLOR_DANGER
    else:
        raise ValueError(f"Unhandled error kind: {error.kind}")
    show_snack(page, user_message(error), color)


def update_message(result, success_message: str) -> tuple[str, str]:
    """Text and colour for a DeliverableUpdate; every degraded part is mentioned."""
    warnings = []
    if result.history_error is not None:
        warnings.append(user_message(result.history_error))
    if result.cascade_error is not None:
        warnings.append(
            f"The parent issue could not be updated: {user_message(result.cascade_error)}"
        )
    if warnings:
        return " ".join([success_message, *warnings]), COLOR_WARNING
    if result.issue_solved:
        return f"{success_message} All deliverables done, issue solved.", COLOR_DONE
    return success_message, COLOR_DONE


def report_update(page: ft.Page, result, success_message: str) -> None:
    message, color = update_message(result, success_message)
    show_snack(page, message, color)


def run_action(page: ft.Page, action, on_success=None) -> bool:
    """
    Run a service call from an event handler.
    IdsError / ValueError become snack bars; anything else is logged and shown in a dialog.
    """
    try:
        result = action()
    except IdsError as e:
        report_error(page, e)
        return False
    except ValueError as e:
        show_snack(page, str(e), COLOR_WARNING)
        return False
    except Exception as e:
        logger.exception("Unexpected error in UI action")
        show_error_dialog(page, "An error occurred", e)
        return False
    if on_success:
        on_success(result)
    return True


def status_chip(status: str) -> ft.Container:
    return ft.Container(
        content=ft.Text(
            status_label(status),
            size=11,
            color="white",
            weight=ft.FontWeight.BOLD,
        ),
        bgcolor=status_color(status),
        border_radius=12,
        padding=ft.Padding.symmetric(horizontal=10, vertical=2),
    )
