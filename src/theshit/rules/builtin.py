"""Built-in correction rules.

Every rule below shares the default priority, so the order of ``build_rules``
is the order in which the dispatcher tries them. Several rules test the same
script (``ls`` with and without output, for one) and rely on that order.
"""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING

from theshit.rules.base import Command, Rule

if TYPE_CHECKING:
    from theshit.fuzzy.matcher import FuzzyMatcher


COMMAND_TYPOS = {
    "puthon": "python",
    "pytohn": "python",
    "pyton": "python",
    "gti": "git",
    "vom": "vim",
    "claer": "clear",
    "cd..": "cd ..",
    "sl": "ls",
    "grpe": "grep",
}

DOCKER_TYPOS = {"tags": "images", "tag": "image"}

NPM_TYPOS = {
    "urgrade": "upgrade",
    "isntall": "install",
    "instal": "install",
    "intsall": "install",
}

PIP_TYPOS = {
    "instatl": "install",
    "instal": "install",
    "isntall": "install",
    "unisntall": "uninstall",
}

GLUED_SUBCOMMANDS = {
    "npminstall": "npm install",
    "gitcommit": "git commit",
    "aptinstall": "apt install",
}

SINGLE_DASH_GIT_FLAGS = ("amend", "continue", "abort")

_UPSTREAM_RE = re.compile(r"git push --set-upstream origin ([a-zA-Z0-9_-]+)")
_GIT_SIMILAR_RE = re.compile(r"The most similar command is\s+([a-z]+)")

DEFAULT_UPSTREAM_BRANCH = "master"


def _join(*parts: str) -> str:
    return " ".join(parts)


def _is_directory_error(output: str) -> bool:
    return "Is a directory" in output or "is a directory" in output


def _replace_subcommand(command: Command, tool: str, typos: dict[str, str]) -> list[str]:
    """Swap a mistyped second token, keeping everything after it."""
    if len(command.parts) > 1 and command.parts[1] in typos:
        return [_join(tool, typos[command.parts[1]], *command.parts[2:])]
    return [command.script]


# sudo

def _sudo_match(command: Command) -> bool:
    output = command.output.lower()
    return (
        "permission denied" in output
        or "eacces" in output
        or "unless you are root" in output
    )


def _unsudo_match(command: Command) -> bool:
    return command.script.startswith("sudo ") and (
        "must not be run as root" in command.output
        or "don't run this as root" in command.output
    )


# unknown commands

def fuzzy_command_rule(matcher: FuzzyMatcher) -> Rule:
    """Suggest executables whose names are a few edits away from the typo."""

    def match(command: Command) -> bool:
        if "command not found" not in command.output or not command.parts:
            return False
        return matcher.has_match(command.parts[0])

    def get_new_command(command: Command) -> list[str]:
        if not command.parts:
            return []
        return matcher.suggest(command.parts[0], command.rest)

    return Rule(
        name="fuzzy_command",
        match=match,
        get_new_command=get_new_command,
        description="Replace an unknown command with the closest executable on PATH",
    )


def _no_command_match(command: Command) -> bool:
    return (
        ("command not found" in command.output or "No command" in command.output)
        and bool(command.parts)
        and command.parts[0] in COMMAND_TYPOS
    )


def _no_command_fix(command: Command) -> list[str]:
    return [_join(COMMAND_TYPOS[command.parts[0]], *command.rest)]


def _has_exists_script_match(command: Command) -> bool:
    return (
        "command not found" in command.output
        and bool(command.parts)
        and os.path.exists(command.parts[0])
    )


def _wrong_hyphen_match(command: Command) -> bool:
    return (
        "command not found" in command.output
        and bool(command.parts)
        and "-" in command.parts[0]
    )


def _missing_space_match(command: Command) -> bool:
    return "command not found" in command.output and command.script.startswith(
        ("npm", "git", "apt")
    )


def _missing_space_fix(command: Command) -> list[str]:
    for glued, spaced in GLUED_SUBCOMMANDS.items():
        if command.script.startswith(glued):
            return [spaced + command.script[len(glued):]]
    return [command.script]


# git

def _git_push_fix(command: Command) -> list[str]:
    found = _UPSTREAM_RE.search(command.output)
    branch = found.group(1) if found else DEFAULT_UPSTREAM_BRANCH
    return [f"git push --set-upstream origin {branch}"]


def _git_not_command_fix(command: Command) -> list[str]:
    found = _GIT_SIMILAR_RE.search(command.output)
    if found:
        return [_join("git", found.group(1), *command.parts[2:])]
    return [command.script]


def _git_commit_add_fix(command: Command) -> list[str]:
    rest = command.script[len("git commit"):]
    return ["git commit -a" + rest, "git commit -p" + rest]


def _git_two_dashes_match(command: Command) -> bool:
    return command.script.startswith("git ") and any(
        f" -{flag}" in command.script for flag in SINGLE_DASH_GIT_FLAGS
    )


def _git_two_dashes_fix(command: Command) -> list[str]:
    for flag in SINGLE_DASH_GIT_FLAGS:
        if f" -{flag}" in command.script:
            return [command.script.replace(f" -{flag}", f" --{flag}", 1)]
    return [command.script]


def _git_main_master_match(command: Command) -> bool:
    return ("master" in command.script and "did you mean 'main'" in command.output) or (
        "main" in command.script and "did you mean 'master'" in command.output
    )


def _git_main_master_fix(command: Command) -> list[str]:
    if "master" in command.script:
        return [command.script.replace("master", "main", 1)]
    return [command.script.replace("main", "master", 1)]


# filesystem

def _cd_mkdir_fix(command: Command) -> list[str]:
    if len(command.parts) >= 2:
        target = command.parts[1]
        return [f"mkdir -p {target} && cd {target}"]
    return [command.script]


def _touch_fix(command: Command) -> list[str]:
    path = command.script[len("touch "):]
    directory, slash, _ = path.rpartition("/")
    if slash:
        return [f"mkdir -p {directory} && touch {path}"]
    return [command.script]


def _chmod_x_match(command: Command) -> bool:
    return (
        "Permission denied" in command.output
        and bool(command.parts)
        and command.parts[0].startswith("./")
    )


def _dry_match(command: Command) -> bool:
    return len(command.parts) >= 2 and command.parts[0] == command.parts[1]


def _ln_s_order_fix(command: Command) -> list[str]:
    if len(command.parts) >= 4:
        return [_join("ln -s", command.parts[3], command.parts[2])]
    return [command.script]


# build and run

def _python_command_match(command: Command) -> bool:
    return (
        "Permission denied" in command.output
        and bool(command.parts)
        and command.parts[0].endswith(".py")
    )


def _cpp11_match(command: Command) -> bool:
    return (
        command.script.startswith(("g++ ", "clang++ "))
        and "-std=" not in command.script
        and ("C++11" in command.output or "c++11" in command.output)
    )


def build_rules(matcher: FuzzyMatcher) -> list[Rule]:
    """Build the built-in catalog in registration order.

    Args:
        matcher: Fuzzy matcher backing the unknown-command rule

    Returns:
        List of rules, first registered first
    """
    return [
        Rule(
            name="sudo",
            match=_sudo_match,
            get_new_command=lambda c: [f"sudo {c.script}"],
            description="Re-run with sudo after a permission error",
        ),
        fuzzy_command_rule(matcher),
        Rule(
            name="git_push",
            match=lambda c: c.script.startswith("git push") and "has no upstream branch" in c.output,
            get_new_command=_git_push_fix,
            description="Set the upstream branch on first push",
        ),
        Rule(
            name="no_command",
            match=_no_command_match,
            get_new_command=_no_command_fix,
            description="Fix well-known command name typos",
        ),
        Rule(
            name="git_not_command",
            match=lambda c: c.script.startswith("git") and "is not a git command" in c.output,
            get_new_command=_git_not_command_fix,
            description="Use git's own 'most similar command' hint",
        ),
        Rule(
            name="git_not_repository",
            match=lambda c: c.script.startswith("git")
            and "fatal: not a git repository (or any of the parent directories):" in c.output,
            get_new_command=lambda c: ["git init"],
            description="Initialize a repository where none exists",
        ),
        Rule(
            name="cd_mkdir",
            match=lambda c: c.script.startswith("cd ")
            and ("No such file or directory" in c.output or "cannot access" in c.output),
            get_new_command=_cd_mkdir_fix,
            description="Create a missing directory before entering it",
        ),
        Rule(
            name="cd_parent",
            match=lambda c: c.script == "cd..",
            get_new_command=lambda c: ["cd .."],
        ),
        Rule(
            name="cd_cs",
            match=lambda c: c.script.startswith("cs "),
            get_new_command=lambda c: ["cd " + c.script[3:]],
        ),
        Rule(
            name="cat_dir",
            match=lambda c: c.script.startswith("cat ") and _is_directory_error(c.output),
            get_new_command=lambda c: ["ls " + c.script[4:]],
            description="List a directory instead of printing it",
        ),
        Rule(
            name="chmod_x",
            match=_chmod_x_match,
            get_new_command=lambda c: [f"chmod +x {c.parts[0]} && {c.script}"],
            description="Make a local script executable",
        ),
        Rule(
            name="cp_omitting_directory",
            match=lambda c: c.script.startswith("cp ") and "omitting directory" in c.output,
            get_new_command=lambda c: ["cp -r " + c.script[3:]],
        ),
        Rule(
            name="dry",
            match=_dry_match,
            get_new_command=lambda c: [_join(c.parts[0], *c.parts[2:])],
            description="Drop a duplicated leading word",
        ),
        Rule(
            name="git_add",
            match=lambda c: c.script.startswith("git add") and "did not match any file" in c.output,
            get_new_command=lambda c: ["git add -A"],
        ),
        Rule(
            name="git_add_force",
            match=lambda c: c.script.startswith("git add")
            and (".gitignore" in c.output or "ignored" in c.output),
            get_new_command=lambda c: [c.script + " --force"],
        ),
        Rule(
            name="git_branch_delete",
            match=lambda c: "git branch -d" in c.script and "not fully merged" in c.output,
            get_new_command=lambda c: [c.script.replace("git branch -d", "git branch -D", 1)],
        ),
        Rule(
            name="git_commit_add",
            match=lambda c: c.script.startswith("git commit")
            and "no changes added to commit" in c.output,
            get_new_command=_git_commit_add_fix,
        ),
        Rule(
            name="git_commit_amend",
            match=lambda c: c.script.startswith("git commit") and "--amend" not in c.script,
            get_new_command=lambda c: [c.script + " --amend"],
        ),
        Rule(
            name="git_pull",
            match=lambda c: c.script.startswith("git pull") and "no tracking information" in c.output,
            get_new_command=lambda c: [
                f"git branch --set-upstream-to=origin/{DEFAULT_UPSTREAM_BRANCH} "
                f"{DEFAULT_UPSTREAM_BRANCH} && git pull"
            ],
        ),
        Rule(
            name="git_two_dashes",
            match=_git_two_dashes_match,
            get_new_command=_git_two_dashes_fix,
            description="Turn -amend/-continue/-abort into their long form",
        ),
        Rule(
            name="grep_recursive",
            match=lambda c: c.script.startswith("grep ") and "Is a directory" in c.output,
            get_new_command=lambda c: ["grep -r " + c.script[5:]],
        ),
        Rule(
            name="has_exists_script",
            match=_has_exists_script_match,
            get_new_command=lambda c: ["./" + c.script],
            description="Run a script from the current directory",
        ),
        Rule(
            name="ls_all",
            match=lambda c: c.script == "ls" and not c.output,
            get_new_command=lambda c: ["ls -A"],
        ),
        Rule(
            name="ls_lah",
            match=lambda c: c.script == "ls" and bool(c.output),
            get_new_command=lambda c: ["ls -lah"],
        ),
        Rule(
            name="mkdir_p",
            match=lambda c: c.script.startswith("mkdir ") and "No such file or directory" in c.output,
            get_new_command=lambda c: ["mkdir -p " + c.script[6:]],
        ),
        Rule(
            name="rm_dir",
            match=lambda c: c.script.startswith("rm ") and _is_directory_error(c.output),
            get_new_command=lambda c: ["rm -rf " + c.script[3:]],
        ),
        Rule(
            name="sl_ls",
            match=lambda c: c.script == "sl" or c.script.startswith("sl "),
            get_new_command=lambda c: ["ls" + c.script[2:]],
        ),
        Rule(
            name="python_command",
            match=_python_command_match,
            get_new_command=lambda c: ["python " + c.script],
        ),
        Rule(
            name="python_execute",
            match=lambda c: c.script.startswith("python ")
            and "No such file" in c.output
            and not c.script.endswith(".py"),
            get_new_command=lambda c: [c.script + ".py"],
        ),
        Rule(
            name="java",
            match=lambda c: c.script.startswith("java ") and c.parts[-1].endswith(".java"),
            get_new_command=lambda c: [_join(*c.parts[:-1], c.parts[-1][: -len(".java")])],
        ),
        Rule(
            name="javac",
            match=lambda c: c.script.startswith("javac ")
            and "No such file" in c.output
            and not c.script.endswith(".java"),
            get_new_command=lambda c: [c.script + ".java"],
        ),
        Rule(
            name="go_run",
            match=lambda c: c.script.startswith("go run ") and not c.script.endswith(".go"),
            get_new_command=lambda c: [c.script + ".go"],
        ),
        Rule(
            name="cargo",
            match=lambda c: c.script == "cargo",
            get_new_command=lambda c: ["cargo build"],
        ),
        Rule(
            name="docker_not_command",
            match=lambda c: c.script.startswith("docker ") and "is not a docker command" in c.output,
            get_new_command=lambda c: _replace_subcommand(c, "docker", DOCKER_TYPOS),
        ),
        Rule(
            name="npm_wrong_command",
            match=lambda c: c.script.startswith("npm ") and "Unknown command" in c.output,
            get_new_command=lambda c: _replace_subcommand(c, "npm", NPM_TYPOS),
        ),
        Rule(
            name="pip_unknown_command",
            match=lambda c: c.script.startswith("pip ") and "unknown command" in c.output,
            get_new_command=lambda c: _replace_subcommand(c, "pip", PIP_TYPOS),
        ),
        Rule(
            name="git_clone_git_clone",
            match=lambda c: c.script.startswith("git clone git clone"),
            get_new_command=lambda c: [c.script[len("git clone "):]],
        ),
        Rule(
            name="wrong_hyphen_before_subcommand",
            match=_wrong_hyphen_match,
            get_new_command=lambda c: [c.script.replace("-", " ", 1)],
        ),
        Rule(
            name="missing_space_before_subcommand",
            match=_missing_space_match,
            get_new_command=_missing_space_fix,
        ),
        Rule(
            name="remove_shell_prompt_literal",
            match=lambda c: c.script.startswith("$ "),
            get_new_command=lambda c: [c.script[2:]],
            description="Strip a pasted '$ ' prompt",
        ),
        Rule(
            name="touch",
            match=lambda c: c.script.startswith("touch ") and "No such file or directory" in c.output,
            get_new_command=_touch_fix,
            description="Create the parent directory before touching a file",
        ),
        Rule(
            name="unsudo",
            match=_unsudo_match,
            get_new_command=lambda c: [c.script[len("sudo "):]],
            description="Drop sudo for tools that refuse to run as root",
        ),
        Rule(
            name="ln_s_order",
            match=lambda c: c.script.startswith("ln -s") and "No such file or directory" in c.output,
            get_new_command=_ln_s_order_fix,
        ),
        Rule(
            name="cpp11",
            match=_cpp11_match,
            get_new_command=lambda c: [c.script + " -std=c++11"],
        ),
        Rule(
            name="git_main_master",
            match=_git_main_master_match,
            get_new_command=_git_main_master_fix,
            description="Swap between main and master branch names",
        ),
    ]
