import os
import subprocess
import sys


def build():
    args = [
        "pyinstaller",
        "main.py",
        "--name",
        "IDSManager",
        "--clean",
        "--onefile",
        "--collect-all",
        "flet_desktop",  # Bundle Flet desktop runtime
        "--collect-data",
        "flet",  # icons.json etc.
        "--hidden-import",
        "asyncio",
    ]
    if os.path.exists("app.ico"):
        args += ["--icon", "app.ico", "--add-data", f"app.ico{os.pathsep}."]

    # CI 環境ではコンソール出力を残す
    if not os.environ.get("CI"):
        args.append("--noconsole")

    print(f"Running: {' '.join(args)}")
    result = subprocess.run(args)

    if result.returncode == 0:
        print("\nBuild successful! Executable is in the 'dist' folder.")
    else:
        print("\nBuild failed.")
        sys.exit(result.returncode)


if __name__ == "__main__":
    build()
