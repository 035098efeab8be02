import flet as ft
from ids_manager.config import (
    COLOR_CARD,
    COLOR_PRIMARY,
    COLOR_TEXT_MUTED,
    COLOR_TEXT_MAIN,
    BORDER_RADIUS_CARD,
)
from ids_manager.domain.models import Deliverable, DeliverableStatus
from ids_manager.ui.helpers import remaining_days_text, status_chip, status_label

_NEXT_STATUS = {
    DeliverableStatus.PENDING.value: DeliverableStatus.IN_PROGRESS.value,
    DeliverableStatus.IN_PROGRESS.value: DeliverableStatus.COMPLETED.value,
}


class TodoCard(ft.Container):
    """
    Deliverable row. Only the accountable user gets the status / edit buttons;
    everyone can open the change history.
    """

    def __init__(
        self,
        deliverable: Deliverable,
        is_accountable: bool,
        on_status,
        on_edit,
        on_history,
        on_open_issue=None,
    ):
        super().__init__()
        self.deliverable = deliverable
        self.is_accountable = is_accountable
        self.on_status = on_status
        self.on_edit = on_edit
        self.on_history = on_history
        self.on_open_issue = on_open_issue

        self.padding = ft.Padding.symmetric(horizontal=16, vertical=12)
        self.bgcolor = COLOR_CARD
        self.border_radius = BORDER_RADIUS_CARD
        self.shadow = ft.BoxShadow(
            blur_radius=2,
            color=ft.Colors.BLACK12,
            offset=ft.Offset(0, 1),
        )
        self.margin = ft.margin.only(bottom=10)
        self.content = self._build_content()

    def _build_content(self):
        d = self.deliverable
        remaining, remaining_color = remaining_days_text(d.due_date)
        if d.status == DeliverableStatus.COMPLETED.value:
            remaining, remaining_color = "Done", COLOR_TEXT_MUTED

        meta = [
            ft.Text(f"Due {d.due_date}", size=12, color=COLOR_TEXT_MUTED),
            ft.Text(remaining, size=12, color=remaining_color),
            ft.Text(f"・  {d.accountable_email or d.accountable_id}", size=12, color=COLOR_TEXT_MUTED),
        ]
        if self.on_open_issue and d.issue_title:
            meta.append(
                ft.TextButton(
                    f"Issue #{d.issue_id}: {d.issue_title}",
                    on_click=lambda _e: self.on_open_issue(d.issue_id),
                )
            )

        actions = [
            ft.IconButton(
                icon=ft.Icons.HISTORY,
                tooltip="History",
                on_click=lambda _e: self.on_history(d),
            )
        ]
        if self.is_accountable:
            next_status = _NEXT_STATUS.get(d.status)
            if next_status:
                actions.insert(
                    0,
                    ft.OutlinedButton(
                        status_label(next_status),
                        icon=ft.Icons.ARROW_FORWARD,
                        on_click=lambda _e: self.on_status(d, next_status),
                    ),
                )
            actions.append(
                ft.IconButton(
                    icon=ft.Icons.EDIT,
                    icon_color=COLOR_PRIMARY,
                    tooltip="Edit",
                    on_click=lambda _e: self.on_edit(d),
                )
            )

        return ft.Row(
            controls=[
                ft.Column(
                    controls=[
                        ft.Text(
                            d.title,
                            weight=ft.FontWeight.W_600,
                            size=14,
                            color=COLOR_TEXT_MAIN,
                        ),
                        *(
                            [ft.Text(d.description, size=12, color=COLOR_TEXT_MUTED)]
                            if d.description
                            else []
                        ),
                        ft.Row(controls=meta, spacing=8, wrap=True),
                    ],
                    spacing=2,
                    expand=True,
                ),
                status_chip(d.status),
                *actions,
            ],
            spacing=8,
            vertical_alignment=ft.CrossAxisAlignment.CENTER,
        )
