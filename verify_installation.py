#!/usr/bin/env python3
"""Verify gitcrev installation."""

import shutil
import subprocess
import sys


def check_module(module_name):
    """Check if a Python module can be imported."""
    try:
        __import__(module_name)
        return True
    except ImportError:
        return False


def check_command():
    """Check that the CLI starts."""
    try:
        # Use python -m for cross-platform compatibility
        result = subprocess.run(
            [sys.executable, '-m', 'gitcrev.cli', '--version'],
            capture_output=True,
            text=True,
            timeout=5
        )
        return result.returncode == 0, result.stdout.strip()
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return False, ""


def main():
    """Run installation verification."""
    print("gitcrev Installation Verification")
    print("=" * 50)

    issues = []

    print(f"\n[OK] Python version: {sys.version.split()[0]}")
    if sys.version_info < (3, 8):
        issues.append("Python 3.8+ required")

    print("\nChecking required dependencies:")
    required = [
        ('gitcrev', 'gitcrev'),
        ('GitPython', 'git'),
        ('click', 'click'),
        ('rich', 'rich'),
    ]

    for display_name, import_name in required:
        if check_module(import_name):
            print(f"  [OK] {display_name}")
        else:
            print(f"  [FAIL] {display_name} (missing)")
            issues.append(f"Missing module: {display_name}")

    # GitPython and the default diff renderer both shell out to git
    print("\nChecking git executable:")
    if shutil.which('git'):
        print("  [OK] git found on PATH")
    else:
        print("  [FAIL] git not found on PATH")
        issues.append("git executable not in PATH")

    print("\nChecking git-crev command:")
    ok, version = check_command()
    if ok:
        print(f"  [OK] {version}")
    else:
        print("  [FAIL] git-crev command not working")
        print("  Try: python -m gitcrev.cli --help")
        issues.append("git-crev command failed")

    print("\n" + "=" * 50)
    if issues:
        print("\n[WARNING] Issues found:")
        for issue in issues:
            print(f"  - {issue}")
        print("\nInstallation incomplete. Run: pip install -e .")
        return 1
    else:
        print("\n[OK] Installation verified successfully!")
        print("\nYou can now use: git crev status")
        return 0


if __name__ == '__main__':
    sys.exit(main())
