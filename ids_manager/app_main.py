"""
app_main.py - IDS Management System メインアプリケーション
"""

import logging
import sys
from pathlib import Path

import flet as ft

from ids_manager.config import APP_TITLE, APP_VERSION, COLOR_BG, COLOR_PRIMARY, DB_PATH
from ids_manager.db import open_services
from ids_manager.ui import actions, views
from ids_manager.ui.helpers import show_error_dialog
from ids_manager.ui_state import AppState

logger = logging.getLogger(__name__)


def resource_path(relative_path: str) -> str:
    """Get absolute path to resource, works for dev and for PyInstaller"""
    if hasattr(sys, "_MEIPASS"):
        return str(Path(sys._MEIPASS) / relative_path)
    return str(Path.cwd() / relative_path)


def main(page: ft.Page):
    page.title = APP_TITLE
    page.window.icon = resource_path("app.ico")
    page.window.maximized = True
    page.theme_mode = ft.ThemeMode.LIGHT
    page.bgcolor = COLOR_BG
    page.padding = 0
    page.theme = ft.Theme(
        color_scheme_seed=COLOR_PRIMARY,
        font_family="Roboto",
    )

    try:
        services = open_services(DB_PATH)
    except Exception as exc:
        logger.exception("Failed to initialize database schema")
        show_error_dialog(page, "Database initialization failed", exc)
        return

    state = AppState()

    def show_section(section: str | None = None):
        if section:
            state.section = section
        state.selected_issue_id = None
        try:
            page.views.clear()
            page.views.append(views.SECTION_BUILDERS[state.section](ctx))
            page.update()
        except Exception as exc:
            logger.exception("Error building section %s", state.section)
            show_error_dialog(page, "An error occurred", exc)

    def back_from_issue():
        if len(page.views) > 1:
            page.views.pop()
        show_section()

    def open_issue(issue_id: int):
        state.selected_issue_id = issue_id
        page.views.append(views.build_issue_detail_view(ctx, issue_id, back_from_issue))
        page.update()

    def refresh():
        # 詳細画面を開いているときはそれを作り直す
        if state.selected_issue_id is not None and len(page.views) > 1:
            issue_id = state.selected_issue_id
            page.views.pop()
            open_issue(issue_id)
        else:
            show_section()

    def sign_in():
        actions.show_sign_in_dialog(page, services, refresh)

    def sign_out():
        services.identity.sign_out()
        logger.info("Signed out")
        refresh()

    ctx = views.ViewContext(
        page=page,
        services=services,
        state=state,
        navigate=show_section,
        open_issue=open_issue,
        refresh=refresh,
        sign_in=sign_in,
        sign_out=sign_out,
    )

    def view_pop(_e: ft.ViewPopEvent = None):
        back_from_issue()

    page.on_view_pop = view_pop

    user = services.identity.get_current_user()
    logger.info("%s %s started as %s", APP_TITLE, APP_VERSION, user.id if user else "(anonymous)")
    show_section("dashboard")
