"""
ui_state.py - UI state container
"""

# issues 一覧だけは未解決のみを既定にする
ISSUE_TAB_UNSOLVED = "UNSOLVED"


class ListState:
    def __init__(self, status: str = "ALL"):
        self.status: str = status
        self.keyword: str = ""
        self.week: str | None = None  # "2025-W03" | None (= 全期間)
        self.mine: bool = False


class AppState:
    def __init__(self):
        self.section: str = "dashboard"  # dashboard | headlines | issues | todos | my_ids | feedback
        self.selected_issue_id: int | None = None
        self.lists: dict[str, ListState] = {
            "headlines": ListState(),
            "issues": ListState(ISSUE_TAB_UNSOLVED),
            "todos": ListState(),
        }
        self.feedback_mine: bool = False
