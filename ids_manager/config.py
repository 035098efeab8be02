"""
config.py - パス解決・アプリ定数
IDS Management System
"""

import os
import sys

# ---------------------------------------------------------------------------
# パス解決（exe 化対応）
# ---------------------------------------------------------------------------


def get_base_path() -> str:
    """
    実行環境に応じてアプリのベースディレクトリを返す。
    - exe 化後  : exe ファイルの存在するディレクトリ
    - スクリプト: プロジェクトルート
    """
    if getattr(sys, "frozen", False):
        return os.path.dirname(sys.executable)
    # config.py is in ids_manager/, so project root is one level up
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


BASE_PATH = get_base_path()

# DB パス: 環境変数で上書き可能
DB_PATH = os.environ.get("IDS_DB_PATH") or os.path.join(BASE_PATH, "ids.db")

# ---------------------------------------------------------------------------
# アプリ定数
# ---------------------------------------------------------------------------

APP_TITLE = "IDS Management System"
APP_VERSION = "0.1.0"

# OS ユーザー名からプロフィールのメールアドレスを組み立てる
USER_EMAIL_DOMAIN = os.environ.get("IDS_EMAIL_DOMAIN", "example.com")

# 週番号: シーズン Y の第1週は Y-1 年 12/30 から始まる
WEEK_ANCHOR_MONTH = 12
WEEK_ANCHOR_DAY = 30
WEEK_FIRST_SEASON = 2025
WEEKS_PER_SEASON = 52

# ---------------------------------------------------------------------------
# カラーパレット
# ---------------------------------------------------------------------------

COLOR_PENDING = "#D4A72C"  # 黄
COLOR_PROGRESS = "#0969DA"  # 青
COLOR_DONE = "#2da44e"  # 緑
COLOR_BG = "#F0F2F5"  # 非常に薄いグレー（背景）
COLOR_CARD = "#FFFFFF"  # カード背景
COLOR_BORDER = "#D0D7DE"  # ボーダー
COLOR_TEXT_MUTED = "#656D76"  # 薄いテキスト
COLOR_TEXT_MAIN = "#1F2328"  # メインテキスト
COLOR_PRIMARY = "#0969DA"  # プライマリ（青）
COLOR_DANGER = "#CF222E"  # 危険色（赤）
COLOR_WARNING = "#9A6700"  # 警告（部分成功）

# AppBar
COLOR_APPBAR_BG = "#FFFFFF"
COLOR_APPBAR_FG = "#1F2328"

# UI 定数
BORDER_RADIUS_CARD = 10
BORDER_RADIUS_BTN = 6
SHADOW_ELEVATION = 2

DEFAULT_PAGE_SIZE = 100
