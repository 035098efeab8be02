"""
views.py - UI view builders
Single responsibility: build flet Views for each section using provided callbacks/state.
"""

import asyncio
from dataclasses import dataclass

import flet as ft

from ids_manager.config import (
    APP_TITLE,
    COLOR_BG,
    COLOR_CARD,
    COLOR_BORDER,
    COLOR_DONE,
    COLOR_PRIMARY,
    COLOR_DANGER,
    COLOR_TEXT_MUTED,
    COLOR_TEXT_MAIN,
    COLOR_APPBAR_BG,
    COLOR_APPBAR_FG,
    BORDER_RADIUS_CARD,
    BORDER_RADIUS_BTN,
    SHADOW_ELEVATION,
    DEFAULT_PAGE_SIZE,
)
from ids_manager.domain import status_rules
from ids_manager.domain.errors import ErrorKind, IdsError, user_message
from ids_manager.domain.models import FeedbackStatus
from ids_manager.domain.weeks import (
    current_week_token,
    parse_week_token,
    shift_week,
    week_label,
    week_options,
)
from ids_manager.services import filter_service
from ids_manager.ui import actions
from ids_manager.ui.components.headline_card import HeadlineCard
from ids_manager.ui.components.issue_card import IssueListCard
from ids_manager.ui.components.todo_card import TodoCard
from ids_manager.ui.helpers import (
    format_datetime,
    report_error,
    report_update,
    run_action,
    show_snack,
    status_chip,
    status_label,
)
from ids_manager.ui_state import ISSUE_TAB_UNSOLVED, ListState

SECTIONS = [
    ("dashboard", "Dashboard", ft.Icons.DASHBOARD),
    ("headlines", "Headlines", ft.Icons.CAMPAIGN),
    ("issues", "Issues", ft.Icons.ADJUST),
    ("todos", "Todos", ft.Icons.CHECKLIST),
    ("my_ids", "My IDS", ft.Icons.PERSON),
    ("feedback", "Feedback", ft.Icons.FEEDBACK),
]

HEADLINE_TABS = [
    ("All", ft.Icons.LIST, "ALL"),
    ("Pending", ft.Icons.SCHEDULE, "pending"),
    ("Completed", ft.Icons.CHECK_CIRCLE, "completed"),
]
ISSUE_TABS = [
    ("Unsolved", ft.Icons.ADJUST, ISSUE_TAB_UNSOLVED),
    ("Pending", ft.Icons.SCHEDULE, "pending"),
    ("Discussed", ft.Icons.FORUM, "discussed"),
    ("Solved", ft.Icons.CHECK_CIRCLE, "solved"),
    ("All", ft.Icons.LIST, "ALL"),
]
TODO_TABS = [
    ("All", ft.Icons.LIST, "ALL"),
    ("Pending", ft.Icons.SCHEDULE, "pending"),
    ("In progress", ft.Icons.AUTORENEW, "in_progress"),
    ("Completed", ft.Icons.CHECK_CIRCLE, "completed"),
]

# 完了系のタブを選んだときは今週に絞り込む
_DONE_TABS = {"completed", "solved"}


@dataclass
class ViewContext:
    """Everything a view needs: page, services, UI state and navigation callbacks."""

    page: ft.Page
    services: object
    state: object
    navigate: object  # (section) -> None
    open_issue: object  # (issue_id) -> None
    refresh: object  # () -> None, rebuild the current view
    sign_in: object
    sign_out: object

    @property
    def user(self):
        return self.services.identity.get_current_user()


def _load(ctx: ViewContext, fetch, default=None):
    """Run a read for a view; failures become a snack bar and ``default``."""
    box = []
    run_action(ctx.page, fetch, box.append)
    if box:
        return box[0]
    return [] if default is None else default


def _empty_state(message: str, icon=ft.Icons.INBOX) -> ft.Container:
    return ft.Container(
        content=ft.Column(
            [
                ft.Icon(icon, size=64, color="#d0d7de"),
                ft.Text(message, color=COLOR_TEXT_MUTED, size=16),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        ),
        alignment=ft.Alignment.CENTER,
        padding=60,
        expand=True,
    )


def _section_title(text: str) -> ft.Text:
    return ft.Text(text, size=16, weight=ft.FontWeight.BOLD, color=COLOR_TEXT_MAIN)


def _card(content: ft.Control, **kwargs) -> ft.Container:
    return ft.Container(
        content=content,
        padding=ft.Padding.all(14),
        bgcolor=COLOR_CARD,
        border_radius=BORDER_RADIUS_CARD,
        border=ft.border.all(1, COLOR_BORDER),
        **kwargs,
    )


# ---------------------------------------------------------------------------
# Chrome: app bar and section navigation
# ---------------------------------------------------------------------------


def build_appbar(ctx: ViewContext, leading: ft.Control | None = None) -> ft.AppBar:
    user = ctx.user
    if user:
        account = [
            ft.Container(
                content=ft.Text(
                    f"🟢  {user.email}", color=COLOR_DONE, size=14, weight=ft.FontWeight.W_500
                ),
                alignment=ft.Alignment.CENTER_LEFT,
            ),
            ft.TextButton("Sign out", icon=ft.Icons.LOGOUT, on_click=lambda _e: ctx.sign_out()),
        ]
    else:
        account = [
            ft.FilledButton(
                "Sign in",
                icon=ft.Icons.LOGIN,
                style=ft.ButtonStyle(bgcolor=COLOR_PRIMARY, color="white"),
                on_click=lambda _e: ctx.sign_in(),
            )
        ]

    return ft.AppBar(
        leading=leading,
        title=ft.Text(
            APP_TITLE,
            color=COLOR_APPBAR_FG,
            weight=ft.FontWeight.BOLD,
            size=20,
        ),
        bgcolor=COLOR_APPBAR_BG,
        center_title=False,
        elevation=SHADOW_ELEVATION,
        shadow_color=ft.Colors.BLACK12,
        automatically_imply_leading=False,
        actions=[
            ft.Container(
                content=ft.Row(account, spacing=8),
                padding=ft.Padding.only(right=24),
            ),
        ],
    )


def _tab_button(label: str, icon, selected: bool, on_click) -> ft.Container:
    color = COLOR_PRIMARY if selected else COLOR_TEXT_MUTED
    return ft.Container(
        content=ft.Row(
            [
                ft.Icon(icon, color=color, size=18),
                ft.Text(
                    label,
                    color=color,
                    weight=ft.FontWeight.BOLD if selected else ft.FontWeight.NORMAL,
                ),
            ],
            alignment=ft.MainAxisAlignment.CENTER,
            spacing=8,
        ),
        padding=ft.Padding.symmetric(vertical=12, horizontal=20),
        border=ft.border.only(
            bottom=ft.BorderSide(2, COLOR_PRIMARY if selected else "transparent")
        ),
        on_click=lambda _: on_click(),
        ink=True,
        animate=ft.Animation(200, "easeOut"),
        border_radius=ft.border_radius.only(top_left=6, top_right=6),
    )


def _nav_row(ctx: ViewContext) -> ft.Row:
    return ft.Row(
        controls=[
            _tab_button(label, icon, ctx.state.section == key, lambda k=key: ctx.navigate(k))
            for key, label, icon in SECTIONS
        ],
        spacing=0,
        scroll=ft.ScrollMode.AUTO,
    )


def _section_view(ctx: ViewContext, route: str, controls: list[ft.Control]) -> ft.View:
    return ft.View(
        route=route,
        appbar=build_appbar(ctx),
        bgcolor=COLOR_BG,
        padding=ft.Padding.symmetric(horizontal=24, vertical=16),
        controls=[_nav_row(ctx), ft.Container(height=12), *controls],
    )


# ---------------------------------------------------------------------------
# List toolbar (status tabs, keyword, week stepper, mine-only)
# ---------------------------------------------------------------------------


def _list_filter(ctx: ViewContext, list_key: str, ls: ListState):
    user = ctx.user
    unsolved = ls.status == ISSUE_TAB_UNSOLVED
    flt = filter_service.build_filter(
        keyword=ls.keyword,
        status="ALL" if unsolved else ls.status,
        week=ls.week,
        owner=user.id if (ls.mine and user) else None,
        unsolved_only=unsolved,
    )
    filter_service.save_last(list_key, flt)
    return flt


def _build_list_toolbar(
    ctx: ViewContext,
    ls: ListState,
    tabs: list,
    mine_label: str,
    on_search,
    extra_actions: list[ft.Control],
) -> ft.Column:
    page = ctx.page
    search_task: asyncio.Task | None = None

    def set_tab(key: str):
        ls.status = key
        if key in _DONE_TABS and ls.week is None:
            ls.week = current_week_token()
        ctx.refresh()

    def set_week(token: str | None):
        ls.week = token
        ctx.refresh()

    def on_mine_change(e):
        ls.mine = bool(e.control.value)
        ctx.refresh()

    async def _debounced_search(term_snapshot: str):
        # Debounce to avoid rebuilding the list on every keystroke
        try:
            await asyncio.sleep(0.5)
        except asyncio.CancelledError:
            return
        if term_snapshot == ls.keyword:
            on_search()

    def on_keyword(e):
        nonlocal search_task
        ls.keyword = e.control.value or ""
        if search_task and not search_task.done():
            search_task.cancel()

        async def runner(term: str):
            await _debounced_search(term)

        search_task = page.run_task(runner, ls.keyword)

    tabs_row = ft.Row(
        controls=[
            _tab_button(label, icon, ls.status == key, lambda k=key: set_tab(k))
            for label, icon, key in tabs
        ],
        spacing=0,
        wrap=True,
    )

    if ls.week:
        week_controls = [
            ft.IconButton(
                icon=ft.Icons.CHEVRON_LEFT,
                tooltip="Previous week",
                on_click=lambda _e: set_week(shift_week(ls.week, -1)),
            ),
            ft.Text(week_label(ls.week), size=13, color=COLOR_TEXT_MAIN),
            ft.IconButton(
                icon=ft.Icons.CHEVRON_RIGHT,
                tooltip="Next week",
                on_click=lambda _e: set_week(shift_week(ls.week, 1)),
            ),
            ft.TextButton("All weeks", on_click=lambda _e: set_week(None)),
        ]
    else:
        week_controls = [
            ft.Text("All weeks", size=13, color=COLOR_TEXT_MUTED),
            ft.TextButton(
                "This week",
                icon=ft.Icons.DATE_RANGE,
                on_click=lambda _e: set_week(current_week_token()),
            ),
        ]
    season, _week = parse_week_token(ls.week or current_week_token())
    week_controls.append(
        ft.PopupMenuButton(
            icon=ft.Icons.CALENDAR_VIEW_WEEK,
            tooltip=f"Jump to a week of {season}",
            items=[
                ft.PopupMenuItem(
                    content=ft.Text(label),
                    on_click=lambda _e, t=token: set_week(t),
                )
                for token, label in week_options(season, include_short=True)
            ],
        )
    )

    search_field = ft.TextField(
        prefix_icon=ft.Icons.SEARCH,
        hint_text="Search by keyword...",
        value=ls.keyword,
        on_change=on_keyword,
        border_radius=BORDER_RADIUS_BTN,
        border_color="transparent",
        bgcolor=COLOR_CARD,
        content_padding=ft.Padding.symmetric(horizontal=12, vertical=12),
        text_size=14,
    )

    return ft.Column(
        controls=[
            ft.ResponsiveRow(
                controls=[
                    ft.Container(content=tabs_row, col={"xs": 12, "md": 8}),
                    ft.Container(
                        content=ft.Row(extra_actions, spacing=8, wrap=True),
                        col={"xs": 12, "md": 4},
                        alignment=ft.Alignment.CENTER_RIGHT,
                    ),
                ],
                spacing=12,
                run_spacing=12,
            ),
            ft.ResponsiveRow(
                controls=[
                    ft.Container(content=search_field, col={"xs": 12, "md": 5}),
                    ft.Container(
                        content=ft.Row(week_controls, spacing=4),
                        col={"xs": 12, "md": 5},
                    ),
                    ft.Container(
                        content=ft.Switch(label=mine_label, value=ls.mine, on_change=on_mine_change),
                        col={"xs": 12, "md": 2},
                    ),
                ],
                spacing=12,
                run_spacing=8,
                vertical_alignment=ft.CrossAxisAlignment.CENTER,
            ),
        ],
        spacing=8,
    )


def _list_view(
    ctx: ViewContext,
    route: str,
    list_key: str,
    tabs: list,
    mine_label: str,
    fetch,
    build_cards,
    empty_message: str,
    extra_actions: list[ft.Control],
) -> ft.View:
    """Shared body for the headline / issue / todo lists."""
    ls = ctx.state.lists[list_key]
    list_column_ref = ft.Ref[ft.Column]()

    def cards_for_current_filter() -> list[ft.Control]:
        items = _load(ctx, lambda: fetch(_list_filter(ctx, list_key, ls)))[:DEFAULT_PAGE_SIZE]
        return build_cards(items) or [_empty_state(empty_message)]

    def reload_inplace():
        col = list_column_ref.current
        if col is None:
            ctx.refresh()
            return
        col.controls = cards_for_current_filter()
        col.update()

    toolbar = _build_list_toolbar(ctx, ls, tabs, mine_label, reload_inplace, extra_actions)
    list_content = ft.Column(
        ref=list_column_ref,
        controls=cards_for_current_filter(),
        scroll=ft.ScrollMode.AUTO,
        expand=True,
        spacing=0,
    )
    return _section_view(ctx, route, [toolbar, ft.Container(height=12), list_content])


# ---------------------------------------------------------------------------
# Headlines
# ---------------------------------------------------------------------------


def build_headline_list_view(ctx: ViewContext) -> ft.View:
    page = ctx.page
    headlines = ctx.services.headlines

    def on_toggle(h):
        run_action(page, lambda: headlines.toggle_status(h.id), lambda _r: ctx.refresh())

    def on_edit(h):
        actions.show_headline_dialog(page, ctx.services, ctx.refresh, headline=h)

    def on_delete(h):
        actions.confirm_delete(
            page,
            "Delete this headline?",
            "This cannot be undone.",
            lambda: run_action(page, lambda: headlines.delete(h.id), lambda _r: ctx.refresh()),
        )

    def build_cards(items):
        user = ctx.user
        return [
            HeadlineCard(
                h,
                is_owner=bool(user and user.id == h.created_by),
                on_toggle=on_toggle,
                on_edit=on_edit,
                on_delete=on_delete,
            )
            for h in items
        ]

    new_btn = ft.FilledButton(
        "New headline",
        icon=ft.Icons.ADD,
        style=ft.ButtonStyle(
            bgcolor=COLOR_DONE,
            color="white",
            shape=ft.RoundedRectangleBorder(radius=BORDER_RADIUS_BTN),
        ),
        on_click=lambda _e: actions.show_headline_dialog(page, ctx.services, ctx.refresh),
    )
    return _list_view(
        ctx,
        "/headlines",
        "headlines",
        HEADLINE_TABS,
        "Mine only",
        headlines.list,
        build_cards,
        "No headlines here",
        [new_btn],
    )


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------


def _issue_cards(ctx: ViewContext, items) -> list[ft.Control]:
    by_issue = _load(
        ctx, lambda: ctx.services.issues.deliverables_map([i.id for i in items]), default={}
    )
    return [
        IssueListCard(i, status_rules.progress(by_issue.get(i.id, [])), ctx.open_issue)
        for i in items
    ]


def build_issue_list_view(ctx: ViewContext) -> ft.View:
    page = ctx.page
    issues = ctx.services.issues

    def build_cards(items):
        return _issue_cards(ctx, items)

    new_btn = ft.FilledButton(
        "New issue",
        icon=ft.Icons.ADD,
        style=ft.ButtonStyle(
            bgcolor=COLOR_DONE,
            color="white",
            shape=ft.RoundedRectangleBorder(radius=BORDER_RADIUS_BTN),
        ),
        on_click=lambda _e: actions.show_issue_dialog(page, ctx.services, ctx.refresh),
    )
    return _list_view(
        ctx,
        "/issues",
        "issues",
        ISSUE_TABS,
        "Mine only",
        issues.list,
        build_cards,
        "No issues with that status",
        [new_btn],
    )


def build_issue_detail_view(ctx: ViewContext, issue_id: int, on_back) -> ft.View:
    page = ctx.page
    services = ctx.services
    back_btn = ft.IconButton(icon=ft.Icons.ARROW_BACK, tooltip="Back", on_click=lambda _e: on_back())

    try:
        issue = services.issues.get(issue_id)
        deliverables = services.issues.deliverables(issue_id)
    except IdsError as e:
        report_error(page, e)
        return ft.View(
            route="/issue",
            appbar=build_appbar(ctx, leading=back_btn),
            controls=[_empty_state(user_message(e), ft.Icons.ERROR_OUTLINE)],
        )

    user = ctx.user
    is_owner = bool(user and user.id == issue.created_by)
    total, done, pct = status_rules.progress(deliverables)

    def on_delete_issue():
        def do_delete():
            run_action(page, lambda: services.issues.delete(issue_id), lambda _r: on_back())

        actions.confirm_delete(
            page,
            "Delete this issue?",
            "This cannot be undone. Issues that still have deliverables cannot be deleted.",
            do_delete,
        )

    owner_actions = []
    if is_owner:
        owner_actions = [
            ft.OutlinedButton(
                "Edit",
                icon=ft.Icons.EDIT,
                on_click=lambda _e: actions.show_issue_dialog(page, services, ctx.refresh, issue=issue),
            ),
            ft.OutlinedButton(
                "Delete",
                icon=ft.Icons.DELETE_OUTLINE,
                style=ft.ButtonStyle(color=COLOR_DANGER),
                on_click=lambda _e: on_delete_issue(),
            ),
        ]

    header = _card(
        ft.Column(
            controls=[
                ft.Row(
                    controls=[
                        ft.Text(
                            f"#{issue.id}  {issue.title}",
                            size=22,
                            weight=ft.FontWeight.BOLD,
                            color=COLOR_TEXT_MAIN,
                            expand=True,
                        ),
                        status_chip(issue.status),
                        *owner_actions,
                    ],
                    spacing=8,
                    vertical_alignment=ft.CrossAxisAlignment.CENTER,
                ),
                ft.Text(
                    f"{issue.author_email or issue.created_by}  ・  created {format_datetime(issue.created_at)}"
                    f"  ・  updated {format_datetime(issue.updated_at)}",
                    size=12,
                    color=COLOR_TEXT_MUTED,
                ),
                ft.Markdown(
                    issue.description or "_No description_",
                    selectable=True,
                    extension_set=ft.MarkdownExtensionSet.GITHUB_WEB,
                ),
                ft.ProgressBar(value=pct / 100, height=8, color=COLOR_DONE),
                ft.Text(f"Progress {pct}% ({done}/{total})", size=12, color=COLOR_TEXT_MUTED),
            ],
            spacing=10,
        )
    )

    todo_cards = _todo_cards(ctx, deliverables, link_issue=False) or [
        _empty_state("No deliverables yet", ft.Icons.CHECKLIST)
    ]

    deliverables_header = ft.Row(
        controls=[
            _section_title(f"Deliverables ({total})"),
            ft.Container(expand=True),
            ft.FilledButton(
                "Add deliverable",
                icon=ft.Icons.ADD,
                style=ft.ButtonStyle(bgcolor=COLOR_PRIMARY, color="white"),
                disabled=user is None,
                on_click=lambda _e: actions.show_deliverable_dialog(
                    page, services, ctx.refresh, issue_id=issue_id
                ),
            ),
        ],
    )

    return ft.View(
        route="/issue",
        appbar=build_appbar(ctx, leading=back_btn),
        bgcolor=COLOR_BG,
        padding=ft.Padding.symmetric(horizontal=24, vertical=16),
        scroll=ft.ScrollMode.AUTO,
        controls=[
            header,
            ft.Container(height=20),
            deliverables_header,
            ft.Container(height=8),
            *todo_cards,
        ],
    )


# ---------------------------------------------------------------------------
# Todos
# ---------------------------------------------------------------------------


def _todo_cards(ctx: ViewContext, items, link_issue: bool = True) -> list[ft.Control]:
    page = ctx.page
    services = ctx.services
    user = ctx.user

    def on_status(d, status):
        def done(result):
            report_update(page, result, f"Marked as {status_label(status)}.")
            ctx.refresh()

        run_action(page, lambda: services.deliverables.update_status(d.id, status), done)

    def on_edit(d):
        actions.show_deliverable_dialog(page, services, ctx.refresh, deliverable=d)

    def on_history(d):
        actions.show_history_dialog(page, services, d)

    return [
        TodoCard(
            d,
            is_accountable=bool(user and user.id == d.accountable_id),
            on_status=on_status,
            on_edit=on_edit,
            on_history=on_history,
            on_open_issue=ctx.open_issue if link_issue else None,
        )
        for d in items
    ]


def build_todo_list_view(ctx: ViewContext) -> ft.View:
    return _list_view(
        ctx,
        "/todos",
        "todos",
        TODO_TABS,
        "Assigned to me",
        ctx.services.deliverables.list,
        lambda items: _todo_cards(ctx, items),
        "No todos due in this range",
        [],
    )


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


def _sign_in_prompt(ctx: ViewContext, message: str) -> ft.Container:
    return ft.Container(
        content=ft.Column(
            [
                ft.Icon(ft.Icons.LOCK_OUTLINE, size=64, color="#d0d7de"),
                ft.Text(message, color=COLOR_TEXT_MUTED, size=16),
                ft.FilledButton("Sign in", icon=ft.Icons.LOGIN, on_click=lambda _e: ctx.sign_in()),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            spacing=12,
        ),
        alignment=ft.Alignment.CENTER,
        padding=60,
        expand=True,
    )


def _count_tile(label: str, value: int, color: str = COLOR_TEXT_MAIN) -> ft.Container:
    return _card(
        ft.Column(
            controls=[
                ft.Text(label, size=12, color=COLOR_TEXT_MUTED),
                ft.Text(str(value), size=20, weight=ft.FontWeight.BOLD, color=color),
            ],
            spacing=2,
        ),
        col={"xs": 6, "md": 3, "lg": 2},
    )


def _activity_chart(activity) -> ft.Row:
    peak = max([a.headlines + a.issues + a.todos for a in activity] + [1])
    bars = []
    for a in activity:
        count = a.headlines + a.issues + a.todos
        bars.append(
            ft.Column(
                controls=[
                    ft.Text(str(count), size=11, color=COLOR_TEXT_MUTED),
                    ft.Container(
                        width=28,
                        height=max(4, int(100 * count / peak)),
                        bgcolor=COLOR_PRIMARY if count else COLOR_BORDER,
                        border_radius=4,
                        tooltip=f"{a.headlines} headlines, {a.issues} issues, {a.todos} todos",
                    ),
                    ft.Text(a.day.strftime("%a"), size=11, color=COLOR_TEXT_MUTED),
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                alignment=ft.MainAxisAlignment.END,
                spacing=4,
            )
        )
    return ft.Row(bars, spacing=16, vertical_alignment=ft.CrossAxisAlignment.END, height=150)


def build_dashboard_view(ctx: ViewContext) -> ft.View:
    try:
        summary = ctx.services.dashboard.summary()
    except IdsError as e:
        if e.kind is not ErrorKind.UNAUTHENTICATED:
            report_error(ctx.page, e)
        return _section_view(ctx, "/", [_sign_in_prompt(ctx, user_message(e))])

    counts_row = ft.ResponsiveRow(
        controls=[
            _count_tile("Headlines", summary.headlines["total"]),
            _count_tile("Open issues", summary.issues["pending"] + summary.issues["discussed"]),
            _count_tile("Solved issues", summary.issues["solved"], COLOR_DONE),
            _count_tile("Open todos", summary.todos["pending"] + summary.todos["in_progress"]),
            _count_tile("Completed todos", summary.todos["completed"], COLOR_DONE),
            _count_tile("Users", summary.users),
        ],
        spacing=12,
        run_spacing=12,
    )

    my_issue_rows = [
        ft.Container(
            content=ft.Column(
                controls=[
                    ft.Row(
                        [
                            ft.Text(p.issue.title, size=13, expand=True, color=COLOR_TEXT_MAIN),
                            status_chip(p.issue.status),
                        ]
                    ),
                    ft.ProgressBar(value=p.percent / 100, height=6, color=COLOR_DONE),
                    ft.Text(f"{p.completed}/{p.total} deliverables", size=11, color=COLOR_TEXT_MUTED),
                ],
                spacing=4,
            ),
            on_click=lambda _e, iid=p.issue.id: ctx.open_issue(iid),
            ink=True,
            padding=ft.Padding.symmetric(vertical=6),
        )
        for p in summary.my_issues
    ] or [ft.Text("You have not raised any issues.", color=COLOR_TEXT_MUTED)]

    return _section_view(
        ctx,
        "/",
        [
            ft.Column(
                controls=[
                    counts_row,
                    ft.Container(height=8),
                    ft.ResponsiveRow(
                        controls=[
                            _card(
                                ft.Column(
                                    [_section_title("Activity (last 7 days)"), _activity_chart(summary.activity)],
                                    spacing=12,
                                ),
                                col={"xs": 12, "md": 6},
                            ),
                            _card(
                                ft.Column([_section_title("My issues"), *my_issue_rows], spacing=6),
                                col={"xs": 12, "md": 6},
                            ),
                        ],
                        spacing=12,
                        run_spacing=12,
                    ),
                    ft.Container(height=8),
                    _section_title(f"My open todos ({len(summary.my_open_todos)})"),
                    *(_todo_cards(ctx, summary.my_open_todos) or [ft.Text("Nothing due.", color=COLOR_TEXT_MUTED)]),
                    ft.Container(height=8),
                    _section_title(f"Todos on my issues ({len(summary.todos_on_my_issues)})"),
                    *_todo_cards(ctx, summary.todos_on_my_issues),
                ],
                spacing=8,
                scroll=ft.ScrollMode.AUTO,
                expand=True,
            )
        ],
    )


# ---------------------------------------------------------------------------
# My IDS
# ---------------------------------------------------------------------------


def build_my_ids_view(ctx: ViewContext) -> ft.View:
    my_ids = ctx.services.my_ids
    try:
        my_issues = my_ids.issues()
        my_headlines = my_ids.headlines()
        my_todos = my_ids.todos()
    except IdsError as e:
        if e.kind is not ErrorKind.UNAUTHENTICATED:
            report_error(ctx.page, e)
        return _section_view(ctx, "/my", [_sign_in_prompt(ctx, user_message(e))])

    issue_cards = _issue_cards(ctx, my_issues)
    headline_rows = [
        _card(
            ft.Row(
                [
                    ft.Text(h.title, size=13, expand=True, color=COLOR_TEXT_MAIN),
                    ft.Text(format_datetime(h.created_at), size=12, color=COLOR_TEXT_MUTED),
                    status_chip(h.status),
                ]
            ),
            margin=ft.margin.only(bottom=8),
        )
        for h in my_headlines
    ]

    def column(title: str, controls: list[ft.Control]) -> ft.Container:
        return ft.Container(
            content=ft.Column(
                [_section_title(title), *(controls or [ft.Text("Nothing yet.", color=COLOR_TEXT_MUTED)])],
                spacing=8,
            ),
            col={"xs": 12, "lg": 4},
        )

    return _section_view(
        ctx,
        "/my",
        [
            ft.Column(
                [
                    ft.ResponsiveRow(
                        controls=[
                            column(f"My issues ({len(my_issues)})", issue_cards),
                            column(f"My headlines ({len(my_headlines)})", headline_rows),
                            column(f"My todos ({len(my_todos)})", _todo_cards(ctx, my_todos)),
                        ],
                        spacing=16,
                        run_spacing=16,
                        vertical_alignment=ft.CrossAxisAlignment.START,
                    )
                ],
                scroll=ft.ScrollMode.AUTO,
                expand=True,
            )
        ],
    )


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------


def build_feedback_view(ctx: ViewContext) -> ft.View:
    page = ctx.page
    services = ctx.services
    state = ctx.state
    user = ctx.user

    if state.feedback_mine and user:
        items = _load(ctx, services.feedback.list_mine)
    else:
        items = _load(ctx, services.feedback.list)

    def set_status(fb, status):
        def done(_fb):
            show_snack(page, f"Feedback marked as {status_label(status)}.")
            ctx.refresh()

        run_action(page, lambda: services.feedback.update_status(fb.id, status), done)

    def set_mine(value: bool):
        state.feedback_mine = value
        ctx.refresh()

    def build_card(fb) -> ft.Container:
        status_menu = []
        if user and user.id == fb.user_id:
            status_menu = [
                ft.PopupMenuButton(
                    icon=ft.Icons.MORE_VERT,
                    tooltip="Change status",
                    items=[
                        ft.PopupMenuItem(
                            content=ft.Text(status_label(s.value)),
                            on_click=lambda _e, s=s.value: set_status(fb, s),
                        )
                        for s in FeedbackStatus
                        if s.value != fb.status
                    ],
                )
            ]
        tags = [
            ft.Container(
                content=ft.Text(tag, size=11, color=COLOR_PRIMARY, weight=ft.FontWeight.W_500),
                bgcolor="#E6F2FF",
                padding=ft.Padding.symmetric(horizontal=8, vertical=2),
                border_radius=10,
            )
            for tag in fb.tags
        ]
        return _card(
            ft.Row(
                controls=[
                    ft.Column(
                        controls=[
                            ft.Text(fb.title, size=15, weight=ft.FontWeight.BOLD, color=COLOR_TEXT_MAIN),
                            *([ft.Text(fb.description, size=13)] if fb.description else []),
                            ft.Text(
                                f"{status_label(fb.category)}  ・  {status_label(fb.priority)} priority"
                                f"  ・  {format_datetime(fb.created_at)}",
                                size=12,
                                color=COLOR_TEXT_MUTED,
                            ),
                            *([ft.Row(tags, spacing=4, wrap=True)] if tags else []),
                        ],
                        spacing=4,
                        expand=True,
                    ),
                    status_chip(fb.status),
                    *status_menu,
                ],
                vertical_alignment=ft.CrossAxisAlignment.START,
            ),
            margin=ft.margin.only(bottom=10),
        )

    header = ft.Row(
        controls=[
            _tab_button("All", ft.Icons.LIST, not state.feedback_mine, lambda: set_mine(False)),
            _tab_button("Mine", ft.Icons.PERSON, state.feedback_mine, lambda: set_mine(True)),
            ft.Container(expand=True),
            ft.FilledButton(
                "Send feedback",
                icon=ft.Icons.ADD_COMMENT,
                style=ft.ButtonStyle(bgcolor=COLOR_PRIMARY, color="white"),
                disabled=user is None,
                on_click=lambda _e: actions.show_feedback_dialog(page, services, ctx.refresh),
            ),
        ],
    )
    cards = [build_card(fb) for fb in items] or [_empty_state("No feedback yet", ft.Icons.FEEDBACK)]
    return _section_view(
        ctx,
        "/feedback",
        [
            header,
            ft.Container(height=12),
            ft.Column(cards, scroll=ft.ScrollMode.AUTO, expand=True, spacing=0),
        ],
    )


SECTION_BUILDERS = {
    "dashboard": build_dashboard_view,
    "headlines": build_headline_list_view,
    "issues": build_issue_list_view,
    "todos": build_todo_list_view,
    "my_ids": build_my_ids_view,
    "feedback": build_feedback_view,
}
