import flet as ft
from ids_manager.config import (
    COLOR_CARD,
    COLOR_DANGER,
    COLOR_PRIMARY,
    COLOR_TEXT_MUTED,
    COLOR_TEXT_MAIN,
    BORDER_RADIUS_CARD,
)
from ids_manager.domain.models import Headline
from ids_manager.ui.helpers import format_datetime, status_chip


class HeadlineCard(ft.Container):
    """Headline row; edit controls are shown to the creator only."""

    def __init__(self, headline: Headline, is_owner: bool, on_toggle, on_edit, on_delete):
        super().__init__()
        self.headline = headline
        self.is_owner = is_owner
        self.on_toggle = on_toggle
        self.on_edit = on_edit
        self.on_delete = on_delete

        self.padding = ft.Padding.all(16)
        self.bgcolor = COLOR_CARD
        self.border_radius = BORDER_RADIUS_CARD
        self.shadow = ft.BoxShadow(
            blur_radius=2,
            color=ft.Colors.BLACK12,
            offset=ft.Offset(0, 1),
        )
        self.margin = ft.margin.only(bottom=12)
        self.content = self._build_content()

    def _build_content(self):
        h = self.headline
        done = h.status == "completed"
        owner_actions = []
        if self.is_owner:
            owner_actions = [
                ft.IconButton(
                    icon=ft.Icons.UNDO if done else ft.Icons.DONE,
                    icon_color=COLOR_PRIMARY,
                    tooltip="Mark as pending" if done else "Mark as completed",
                    on_click=lambda _e: self.on_toggle(h),
                ),
                ft.IconButton(
                    icon=ft.Icons.EDIT,
                    tooltip="Edit",
                    on_click=lambda _e: self.on_edit(h),
                ),
                ft.IconButton(
                    icon=ft.Icons.DELETE_OUTLINE,
                    icon_color=COLOR_DANGER,
                    tooltip="Delete",
                    on_click=lambda _e: self.on_delete(h),
                ),
            ]

        return ft.Row(
            controls=[
                ft.Column(
                    controls=[
                        ft.Text(
                            h.title,
                            weight=ft.FontWeight.BOLD,
                            size=16,
                            color=COLOR_TEXT_MAIN,
                        ),
                        *(
                            [ft.Text(h.description, size=13, color=COLOR_TEXT_MAIN, selectable=True)]
                            if h.description
                            else []
                        ),
                        ft.Text(
                            f"{h.author_email or h.created_by}  ・  {format_datetime(h.created_at)}",
                            size=12,
                            color=COLOR_TEXT_MUTED,
                        ),
                    ],
                    spacing=4,
                    expand=True,
                ),
                status_chip(h.status),
                *owner_actions,
            ],
            spacing=8,
            vertical_alignment=ft.CrossAxisAlignment.START,
        )
