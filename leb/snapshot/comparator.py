"""Exact-match comparison of expected and actual rendered output."""

from dataclasses import dataclass

DIFF_HEADER = ("--- expected", "+++ actual", "")


@dataclass(frozen=True)
class CompareResult:
    """Result of comparing two snapshot strings."""

    match: bool
    diff: str | None = None


def compare_snapshots(expected: str, actual: str) -> CompareResult:
    """Compare expected output (from a snapshot) with actual adapter output.

    No normalization is applied; trailing whitespace and line endings count.
    """
    if expected == actual:
        return CompareResult(match=True)
    return CompareResult(match=False, diff=generate_diff(expected, actual))


def generate_diff(expected: str, actual: str) -> str:
    """Build a line-by-line diff of two strings.

    Lines are paired by index up to the longer of the two inputs. Equal lines
    are prefixed with two spaces, lines only in ``actual`` with ``+``, lines
    only in ``expected`` with ``-``, and a changed line emits both.
    """
    expected_lines = expected.split("\n")
    actual_lines = actual.split("\n")

    lines = list(DIFF_HEADER)
    for i in range(max(len(expected_lines), len(actual_lines))):
        expected_line = expected_lines[i] if i < len(expected_lines) else None
        actual_line = actual_lines[i] if i < len(actual_lines) else None

        if expected_line == actual_line:
            lines.append(f"  {expected_line}")
        elif expected_line is None:
            lines.append(f"+ {actual_line}")
        elif actual_line is None:
            lines.append(f"- {expected_line}")
        else:
            lines.append(f"- {expected_line}")
            lines.append(f"+ {actual_line}")

    return "\n".join(lines)
