"""
actions.py - UI-side actions and dialogs
Single responsibility: modal flows that create or edit headlines, issues, todos and feedback.
"""

from datetime import date

import flet as ft

from ids_manager.config import (
    COLOR_BORDER,
    COLOR_DANGER,
    COLOR_PRIMARY,
    COLOR_TEXT_MUTED,
    BORDER_RADIUS_BTN,
    BORDER_RADIUS_CARD,
    USER_EMAIL_DOMAIN,
)
from ids_manager.domain.models import (
    Deliverable,
    DeliverableStatus,
    FeedbackCategory,
    FeedbackPriority,
    Headline,
    HeadlineStatus,
    Issue,
    IssueStatus,
    Profile,
)
from ids_manager.ui.helpers import (
    format_datetime,
    parse_tags,
    report_update,
    run_action,
    show_snack,
    status_label,
)


def _field(label: str, value: str = "", **kwargs) -> ft.TextField:
    return ft.TextField(
        label=label,
        value=value,
        border_color=COLOR_BORDER,
        focused_border_color=COLOR_PRIMARY,
        border_radius=BORDER_RADIUS_BTN,
        **kwargs,
    )


def _dropdown(label: str, options: list[tuple[str, str]], value: str) -> ft.Dropdown:
    return ft.Dropdown(
        label=label,
        options=[ft.dropdown.Option(key=key, text=text) for key, text in options],
        value=value,
        border_color=COLOR_BORDER,
        focused_border_color=COLOR_PRIMARY,
        border_radius=BORDER_RADIUS_BTN,
    )


def _status_options(enum_cls) -> list[tuple[str, str]]:
    return [(m.value, status_label(m.value)) for m in enum_cls]


def _set_due_date_value(e: ft.ControlEvent, field: ft.TextField, page: ft.Page) -> None:
    """Sync DatePicker value into the read-only text field (YYYY-MM-DD)."""
    val = getattr(e.control, "value", "")
    if val:
        field.value = val.strftime("%Y-%m-%d") if hasattr(val, "strftime") else str(val)[:10]
    else:
        field.value = ""
    page.update()


def _open_date_picker(dp: ft.DatePicker, page: ft.Page) -> None:
    dp.open = True
    page.update()


def _show_form(
    page: ft.Page,
    title: str,
    controls: list[ft.Control],
    on_save,
    save_label: str = "Save",
) -> ft.AlertDialog:
    """Open a modal form; ``on_save(dialog, error_text)`` closes it on success."""
    error_text = ft.Text("", color=COLOR_DANGER, size=12)

    def on_cancel(_e=None):
        dialog.open = False
        page.update()

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title, weight=ft.FontWeight.BOLD),
        content=ft.Container(
            content=ft.Column(
                controls=[*controls, error_text],
                spacing=14,
                tight=True,
            ),
            width=560,
        ),
        actions=[
            ft.TextButton("Cancel", on_click=on_cancel),
            ft.FilledButton(
                save_label,
                style=ft.ButtonStyle(bgcolor=COLOR_PRIMARY, color="white"),
                on_click=lambda _e: on_save(dialog, error_text),
            ),
        ],
        actions_alignment=ft.MainAxisAlignment.END,
        shape=ft.RoundedRectangleBorder(radius=BORDER_RADIUS_CARD),
    )
    page.overlay.append(dialog)
    dialog.open = True
    page.update()
    return dialog


def _require_title(field: ft.TextField, error_text: ft.Text, page: ft.Page) -> str | None:
    title = (field.value or "").strip()
    if not title:
        error_text.value = "⚠  Title is required"
        page.update()
        return None
    return title


def _close_and(page: ft.Page, dialog: ft.AlertDialog, callback):
    def _done(_result=None):
        dialog.open = False
        page.update()
        callback()

    return _done


def confirm_delete(page: ft.Page, title: str, message: str, on_confirm):
    def close(_e=None):
        dlg.open = False
        page.update()

    def confirm(_e=None):
        close()
        on_confirm()

    dlg = ft.AlertDialog(
        modal=True,
        title=ft.Text(title, weight=ft.FontWeight.BOLD),
        content=ft.Text(message, color=COLOR_TEXT_MUTED),
        actions=[
            ft.TextButton("Cancel", on_click=close),
            ft.FilledButton("Delete", bgcolor=COLOR_DANGER, color="white", on_click=confirm),
        ],
        actions_alignment=ft.MainAxisAlignment.END,
    )
    page.overlay.append(dlg)
    dlg.open = True
    page.update()


# ---------------------------------------------------------------------------
# Headlines
# ---------------------------------------------------------------------------


def show_headline_dialog(page: ft.Page, services, on_saved, headline: Headline | None = None):
    """Create a headline, or edit one (title, description, status) when given."""
    title_field = _field("Title *", headline.title if headline else "")
    description_field = _field(
        "Description",
        headline.description if headline else "",
        multiline=True,
        min_lines=3,
        max_lines=8,
    )
    controls = [title_field, description_field]
    status_field = None
    if headline:
        status_field = _dropdown("Status", _status_options(HeadlineStatus), headline.status)
        controls.append(status_field)

    def on_save(dialog, error_text):
        title = _require_title(title_field, error_text, page)
        if title is None:
            return
        description = description_field.value or ""

        def save():
            if headline:
                return services.headlines.update(
                    headline.id, title, description, status=status_field.value
                )
            return services.headlines.create(title, description)

        run_action(page, save, _close_and(page, dialog, on_saved))

    _show_form(
        page,
        "Edit headline" if headline else "New headline",
        controls,
        on_save,
        "Save" if headline else "Create",
    )


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------


def show_issue_dialog(page: ft.Page, services, on_saved, issue: Issue | None = None):
    """Create an issue, or edit title/description/status of an existing one."""
    title_field = _field("Title *", issue.title if issue else "")
    description_field = _field(
        "Description",
        issue.description if issue else "",
        multiline=True,
        min_lines=4,
        max_lines=12,
    )
    controls = [title_field, description_field]
    status_field = None
    if issue:
        status_field = _dropdown("Status", _status_options(IssueStatus), issue.status)
        controls.append(status_field)

    def on_save(dialog, error_text):
        title = _require_title(title_field, error_text, page)
        if title is None:
            return
        description = description_field.value or ""
        if not issue:
            run_action(
                page,
                lambda: services.issues.create(title, description),
                _close_and(page, dialog, on_saved),
            )
            return

        def save():
            saved = services.issues.update(issue.id, title, description)
            if status_field.value and status_field.value != saved.status:
                saved = services.issues.update_status(issue.id, status_field.value)
            return saved

        run_action(page, save, _close_and(page, dialog, on_saved))

    _show_form(
        page,
        "Edit issue" if issue else "New issue",
        controls,
        on_save,
        "Save" if issue else "Create",
    )


# ---------------------------------------------------------------------------
# Deliverables (todos)
# ---------------------------------------------------------------------------


def show_deliverable_dialog(
    page: ft.Page,
    services,
    on_saved,
    issue_id: int | None = None,
    deliverable: Deliverable | None = None,
):
    """
    New deliverable on ``issue_id`` or edit of ``deliverable``.
    The accountable user is picked from registered profiles.
    """
    users = services.users.list()
    user_options = [(u.id, u.email) for u in users]
    me = services.identity.get_current_user()

    title_field = _field("Title *", deliverable.title if deliverable else "")
    description_field = _field(
        "Description",
        deliverable.description if deliverable else "",
        multiline=True,
        min_lines=2,
        max_lines=6,
    )
    due_date_field = _field(
        "Due date *",
        deliverable.due_date if deliverable else date.today().isoformat(),
        hint_text="Pick a date",
        read_only=True,
        suffix=ft.IconButton(
            icon=ft.Icons.CALENDAR_MONTH,
            tooltip="Pick a date",
            on_click=lambda _e: _open_date_picker(due_date_picker, page),
        ),
    )
    due_date_picker = ft.DatePicker(
        first_date=date(2000, 1, 1),
        last_date=date(2100, 12, 31),
        on_change=lambda e: _set_due_date_value(e, due_date_field, page),
    )
    page.overlay.append(due_date_picker)

    if deliverable:
        accountable = deliverable.accountable_id
    else:
        accountable = me.id if me else (users[0].id if users else None)
    accountable_field = _dropdown("Accountable", user_options, accountable)
    controls = [title_field, description_field, due_date_field, accountable_field]
    status_field = None
    if deliverable:
        status_field = _dropdown(
            "Status", _status_options(DeliverableStatus), deliverable.status
        )
        controls.append(status_field)

    def on_save(dialog, error_text):
        title = _require_title(title_field, error_text, page)
        if title is None:
            return
        if not accountable_field.value:
            error_text.value = "⚠  Choose an accountable user"
            page.update()
            return
        close = _close_and(page, dialog, on_saved)
        if not deliverable:
            run_action(
                page,
                lambda: services.deliverables.create(
                    issue_id,
                    title,
                    description_field.value or "",
                    due_date_field.value,
                    accountable_field.value,
                ),
                close,
            )
            return

        def on_updated(result):
            close()
            report_update(page, result, "Deliverable updated.")

        run_action(
            page,
            lambda: services.deliverables.update(
                deliverable.id,
                title=title,
                description=description_field.value or "",
                due_date=due_date_field.value,
                accountable_id=accountable_field.value,
                status=status_field.value,
            ),
            on_updated,
        )

    _show_form(
        page,
        "Edit deliverable" if deliverable else "New deliverable",
        controls,
        on_save,
        "Save" if deliverable else "Create",
    )


def show_history_dialog(page: ft.Page, services, deliverable: Deliverable):
    entries = []
    run_action(
        page,
        lambda: services.deliverables.history(deliverable.id),
        entries.extend,
    )
    if entries:
        rows = [
            ft.Text(
                f"{format_datetime(e.created_at)}  {e.updated_by_email or e.updated_by}: "
                f"{e.field_name} {e.old_value or '-'} → {e.new_value or '-'}",
                size=12,
                selectable=True,
            )
            for e in entries
        ]
    else:
        rows = [ft.Text("No changes recorded yet.", color=COLOR_TEXT_MUTED)]

    def close(_e=None):
        dialog.open = False
        page.update()

    dialog = ft.AlertDialog(
        title=ft.Text(f"History: {deliverable.title}", weight=ft.FontWeight.BOLD),
        content=ft.Container(
            content=ft.Column(rows, spacing=6, scroll=ft.ScrollMode.AUTO, tight=True),
            width=560,
            height=320,
        ),
        actions=[ft.TextButton("Close", on_click=close)],
    )
    page.overlay.append(dialog)
    dialog.open = True
    page.update()


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------


def show_feedback_dialog(page: ft.Page, services, on_saved):
    title_field = _field("Title *")
    description_field = _field("Description", multiline=True, min_lines=3, max_lines=8)
    category_field = _dropdown(
        "Category",
        _status_options(FeedbackCategory),
        FeedbackCategory.OTHER.value,
    )
    priority_field = _dropdown(
        "Priority",
        _status_options(FeedbackPriority),
        FeedbackPriority.MEDIUM.value,
    )
    tags_field = _field("Tags (comma separated)")

    def on_save(dialog, error_text):
        title = _require_title(title_field, error_text, page)
        if title is None:
            return

        def done(_fb):
            _close_and(page, dialog, on_saved)()
            show_snack(page, "Thanks for the feedback!")

        run_action(
            page,
            lambda: services.feedback.submit(
                title,
                description_field.value or "",
                category=category_field.value,
                priority=priority_field.value,
                tags=parse_tags(tags_field.value),
            ),
            done,
        )

    _show_form(
        page,
        "Send feedback",
        [title_field, description_field, category_field, priority_field, tags_field],
        on_save,
        "Send",
    )


# ---------------------------------------------------------------------------
# Sign-in
# ---------------------------------------------------------------------------


def show_sign_in_dialog(page: ft.Page, services, on_signed_in):
    """Pick an existing profile or type a new user name."""
    users = services.users.list()
    existing = _dropdown("Existing user", [("", "(new user)")] + [(u.id, u.email) for u in users], "")
    name_field = _field("New user name", hint_text=f"name → name@{USER_EMAIL_DOMAIN}")

    def on_save(dialog, error_text):
        by_id = {u.id: u for u in users}
        if existing.value:
            profile = by_id[existing.value]
        else:
            name = (name_field.value or "").strip()
            if not name:
                error_text.value = "⚠  Choose a user or type a name"
                page.update()
                return
            profile = by_id.get(name) or Profile(id=name, email=f"{name}@{USER_EMAIL_DOMAIN}")
        run_action(
            page,
            lambda: services.identity.sign_in(profile),
            _close_and(page, dialog, on_signed_in),
        )

    _show_form(page, "Sign in", [existing, name_field], on_save, "Sign in")
