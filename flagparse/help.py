"""
help.py
renders usage/help and version text from declared options.
"""
from typing import Dict, List, Sequence

HELP_WIDTH = 76
MAX_FLAG_COLUMN = 30

def render_version(version: str) -> str:
    return version

def render_help(usage: str, specs: Sequence) -> str:
    shown = [spec for spec in specs if spec.flags]
    if not shown:
        return usage + "\n" if usage else ""

    groups: Dict[str, List] = {"": []}
    for spec in shown:
        groups.setdefault(spec.dest, []).append(spec)

    longest = max(len(_flag_column(spec)) for spec in shown)
    longest = min(longest, MAX_FLAG_COLUMN)

    blocks = []
    for dest, members in groups.items():
        if members:
            blocks.append(_help_one_group(dest, members, longest))

    result = usage + "\n\n" if usage else ""
    return result + "\n".join(blocks)

def _flag_column(spec) -> str:
    column = "  " + ", ".join(spec.flags)
    if not spec.implicit:
        column += " " + spec.value.metavar()
    return column

def _help_one_group(dest: str, specs: Sequence, longest: int) -> str:
    result = f" {dest} options:\n" if dest else ""
    indent = longest + 2

    for spec in specs:
        option_str = _flag_column(spec)
        desc = spec.info
        if spec.has_default:
            desc += f" (default: {spec.render_default()})"

        desc_lines = _wrap_text(desc, HELP_WIDTH - indent)
        if len(option_str) > longest:
            result += option_str + "\n"
        else:
            result += (option_str.ljust(indent) + desc_lines.pop(0)).rstrip() + "\n"
        for line in desc_lines:
            if line:
                result += " " * indent + line + "\n"

    return result

def _wrap_text(text: str, width: int) -> List[str]:
    words = text.split()
    lines = []
    current_line = ""
    for word in words:
        if current_line and len(current_line) + 1 + len(word) > width:
            lines.append(current_line)
            current_line = word
        elif current_line:
            current_line += " " + word
        else:
            current_line = word
    lines.append(current_line)
    return lines
