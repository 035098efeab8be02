import flet as ft
from ids_manager.config import (
    COLOR_CARD,
    COLOR_DONE,
    COLOR_TEXT_MUTED,
    COLOR_TEXT_MAIN,
    BORDER_RADIUS_CARD,
)
from ids_manager.domain.models import Issue
from ids_manager.ui.helpers import format_datetime, status_chip, status_color


class IssueListCard(ft.Container):
    def __init__(
        self,
        issue: Issue,
        progress: tuple[int, int, int],
        on_click_callback,
    ):
        super().__init__()
        self.issue = issue
        self.progress = progress
        self.on_click_callback = on_click_callback

        self.padding = ft.Padding.all(16)
        self.bgcolor = COLOR_CARD
        self.border_radius = BORDER_RADIUS_CARD
        self.border = ft.border.all(1, "transparent")
        self.shadow = ft.BoxShadow(
            blur_radius=2,
            color=ft.Colors.BLACK12,
            offset=ft.Offset(0, 1),
        )
        self.on_click = self._handle_click
        self.ink = True
        self.margin = ft.margin.only(bottom=12)

        self.content = self._build_content()

    def _handle_click(self, e):
        if self.on_click_callback:
            self.on_click_callback(self.issue.id)

    def _build_content(self):
        issue = self.issue
        total, done, pct = self.progress
        solved = issue.status == "solved"

        meta_row = [
            ft.Text(f"#{issue.id}", size=12, color=COLOR_TEXT_MUTED),
            ft.Text(
                f"{issue.author_email or issue.created_by}  ・  {format_datetime(issue.created_at)}",
                size=12,
                color=COLOR_TEXT_MUTED,
            ),
            ft.Text(
                f"・  Deliverables: {done}/{total}" if total else "・  No deliverables yet",
                size=12,
                color=COLOR_TEXT_MUTED,
            ),
        ]

        return ft.Row(
            controls=[
                ft.Icon(
                    ft.Icons.CHECK_CIRCLE if solved else ft.Icons.ADJUST,
                    size=24,
                    color=status_color(issue.status),
                ),
                ft.Column(
                    controls=[
                        ft.Text(
                            issue.title,
                            weight=ft.FontWeight.BOLD,
                            size=16,
                            color=COLOR_TEXT_MAIN,
                            max_lines=1,
                            overflow=ft.TextOverflow.ELLIPSIS,
                        ),
                        ft.Row(controls=meta_row, spacing=8, wrap=True),
                        *(
                            [
                                ft.ProgressBar(
                                    value=pct / 100,
                                    height=6,
                                    color=COLOR_DONE,
                                )
                            ]
                            if total
                            else []
                        ),
                    ],
                    spacing=4,
                    expand=True,
                ),
                status_chip(issue.status),
            ],
            spacing=16,
            alignment=ft.MainAxisAlignment.START,
            vertical_alignment=ft.CrossAxisAlignment.START,
        )
