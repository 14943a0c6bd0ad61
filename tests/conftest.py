"""
Configuration for pytest test suite
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def modified_file_diff():
    """git diff of one modified file with two hunks"""
    return "\n".join([
        "diff --git a/src/calculator.py b/src/calculator.py",
        "index 3b18e51..a9c2f04 100644",
        "--- a/src/calculator.py",
        "+++ b/src/calculator.py",
        "@@ -10,3 +10,4 @@ class Calculator:",
        "     def add(self, a, b):",
        "-        return a + b",
        "+        # Coerce inputs",
        "+        return float(a) + float(b)",
        " ",
        "@@ -40 +41 @@ def divide(self, a, b):",
        "-        return a / b",
        "+        return a / b if b else None",
        "",
    ])


@pytest.fixture
def added_file_diff():
    """git diff of a newly added file"""
    return "\n".join([
        "diff --git a/docs/notes.txt b/docs/notes.txt",
        "new file mode 100644",
        "index 0000000..e69de29",
        "--- /dev/null",
        "+++ b/docs/notes.txt",
        "@@ -0,0 +1,2 @@",
        "+first line",
        "+second line",
        "",
    ])


@pytest.fixture
def deleted_file_diff():
    """git diff of a deleted file"""
    return "\n".join([
        "diff --git a/legacy/old_module.py b/legacy/old_module.py",
        "deleted file mode 100644",
        "index 83db48f..0000000",
        "--- a/legacy/old_module.py",
        "+++ /dev/null",
        "@@ -1,3 +0,0 @@",
        "-def old_function():",
        "-    return 'old'",
        "-",
        "",
    ])


@pytest.fixture
def renamed_file_diff():
    """git diff of a renamed file with one context-only hunk"""
    return "\n".join([
        "diff --git a/old.txt b/new.txt",
        "similarity index 90%",
        "rename from old.txt",
        "rename to new.txt",
        "index 1111111..2222222 100644",
        "--- a/old.txt",
        "+++ b/new.txt",
        "@@ -1 +1 @@",
        " unchanged text",
        "",
    ])


@pytest.fixture
def multi_file_diff(modified_file_diff, added_file_diff, deleted_file_diff, renamed_file_diff):
    """Four file sections with five hunks in total"""
    return modified_file_diff + added_file_diff + deleted_file_diff + renamed_file_diff
