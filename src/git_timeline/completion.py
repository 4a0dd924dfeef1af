from __future__ import annotations

SHELLS = ("zsh", "bash", "fish")
DEFAULT_CMD_NAME = "git-timeline"

# (flag, description, completion values or "", takes an argument)
OPTIONS: tuple[tuple[str, str, str, bool], ...] = (
    ("root", "Root folder to search", "", True),
    ("email", "Author email", "", True),
    ("name", "Author name", "", True),
    ("sort", "Sort order", "asc desc", True),
    ("max-depth", "Maximum directory depth", "", True),
    ("since", "Only include commits after/on this date", "", True),
    ("until", "Only include commits before/on this date", "", True),
    ("last-month", "Previous calendar month", "", False),
    ("format", "Output format", "plain table md", True),
    ("jobs", "Parallel git jobs", "", True),
    ("timeout", "Timeout per git call in seconds", "", True),
    ("config", "Path to config.json", "", True),
    ("generate-completion", "Generate completion script", "zsh bash fish", True),
    ("cmd-name", "Command name for completion script", "", True),
    ("help", "Show help", "", False),
)


def _zsh(cmd_name: str, fn: str) -> str:
    lines = [f"#compdef {cmd_name}", "", f"_{fn}() {{", "  local -a args", "  args=("]
    for flag, desc, values, takes_arg in OPTIONS:
        if flag == "root":
            lines.append(f"    '--{flag}[{desc}]:path:_files -/'")
        elif values:
            lines.append(f"    '--{flag}[{desc}]: :({values})'")
        elif takes_arg:
            lines.append(f"    '--{flag}[{desc}]:value'")
        else:
            lines.append(f"    '--{flag}[{desc}]'")
    lines += ["  )", "  _arguments -s $args", "}", "", f"compdef _{fn} {cmd_name}"]
    return "\n".join(lines)


def _bash(cmd_name: str, fn: str) -> str:
    opts = " ".join(f"--{flag}" for flag, _d, _v, _a in OPTIONS)
    lines = [
        f"_{fn}_complete() {{",
        "  local cur prev opts",
        "  COMPREPLY=()",
        '  cur="${COMP_WORDS[COMP_CWORD]}"',
        '  prev="${COMP_WORDS[COMP_CWORD-1]}"',
        f'  opts="{opts}"',
        '  case "$prev" in',
    ]
    for flag, _desc, values, _takes_arg in OPTIONS:
        if values:
            lines.append(f"    --{flag})")
            lines.append(f'      COMPREPLY=( $(compgen -W "{values}" -- "$cur") ); return 0 ;;')
    lines.append("    --root)")
    lines.append('      COMPREPLY=( $(compgen -d -- "$cur") ); return 0 ;;')
    lines += [
        "  esac",
        '  COMPREPLY=( $(compgen -W "$opts" -- "$cur") )',
        "}",
        f"complete -F _{fn}_complete {cmd_name}",
    ]
    return "\n".join(lines)


def _fish(cmd_name: str) -> str:
    lines: list[str] = []
    for flag, desc, values, takes_arg in OPTIONS:
        line = f'complete -c {cmd_name} -l {flag} -d "{desc}"'
        if takes_arg:
            line += " -r"
        if values:
            line += f' -a "{values}"'
        lines.append(line)
    return "\n".join(lines)


def generate_completion(shell: str, cmd_name: str = DEFAULT_CMD_NAME) -> str:
    cmd_name = (cmd_name or "").strip() or DEFAULT_CMD_NAME
    fn = cmd_name.replace("-", "_")
    if shell == "zsh":
        return _zsh(cmd_name, fn)
    if shell == "bash":
        return _bash(cmd_name, fn)
    if shell == "fish":
        return _fish(cmd_name)
    raise ValueError(f"Unsupported shell: {shell!r} (expected one of {', '.join(SHELLS)})")
