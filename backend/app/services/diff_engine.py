"""
Line-oriented comparison of contract texts.

Lines keep their trailing newline, so ``"a"`` and ``"a\\n"`` are different
lines. The change list comes from a linear-space Myers search and is
minimal: it never removes or adds a line that could have been kept.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

KEEP = " "
ADD = "+"
REMOVE = "-"


@dataclass
class DiffSegment:
    """A run of consecutive lines sharing one change tag."""

    added: bool
    removed: bool
    lines: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.lines)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def prefix(self) -> str:
        if self.added:
            return ADD
        if self.removed:
            return REMOVE
        return KEEP


@dataclass
class DiffResult:
    segments: List[DiffSegment]

    @property
    def unified(self) -> str:
        return render_unified(self.segments)

    @property
    def has_changes(self) -> bool:
        return any(segment.added or segment.removed for segment in self.segments)


def split_lines(text: str) -> List[str]:
    """Split text into lines, each keeping its ``\\n`` terminator."""
    if not text:
        return []
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


def _bisect(a: List[str], b: List[str]) -> Optional[Tuple[int, int]]:
    """
    Find the middle snake of the edit graph (Myers, linear space).

    Both sequences must hold at least two lines. Returns the point where the
    forward and reverse paths meet, or None when the sequences share no line.
    """
    n, m = len(a), len(b)
    max_d = (n + m + 1) // 2
    v_offset = max_d
    v_length = 2 * max_d
    v1 = [-1] * v_length
    v1[v_offset + 1] = 0
    v2 = list(v1)
    delta = n - m
    # Odd delta: the forward path is the one that collides.
    front = delta % 2 != 0
    # Keep the k loops inside the grid.
    k1start = k1end = k2start = k2end = 0

    for d in range(max_d):
        for k1 in range(-d + k1start, d + 1 - k1end, 2):
            k1_offset = v_offset + k1
            if k1 == -d or (k1 != d and v1[k1_offset - 1] < v1[k1_offset + 1]):
                x1 = v1[k1_offset + 1]
            else:
                x1 = v1[k1_offset - 1] + 1
            y1 = x1 - k1
            while x1 < n and y1 < m and a[x1] == b[y1]:
                x1 += 1
                y1 += 1
            v1[k1_offset] = x1
            if x1 > n:
                k1end += 2
            elif y1 > m:
                k1start += 2
            elif front:
                k2_offset = v_offset + delta - k1
                if 0 <= k2_offset < v_length and v2[k2_offset] != -1:
                    if x1 >= n - v2[k2_offset]:
                        return x1, y1

        for k2 in range(-d + k2start, d + 1 - k2end, 2):
            k2_offset = v_offset + k2
            if k2 == -d or (k2 != d and v2[k2_offset - 1] < v2[k2_offset + 1]):
                x2 = v2[k2_offset + 1]
            else:
                x2 = v2[k2_offset - 1] + 1
            y2 = x2 - k2
            while x2 < n and y2 < m and a[-x2 - 1] == b[-y2 - 1]:
                x2 += 1
                y2 += 1
            v2[k2_offset] = x2
            if x2 > n:
                k2end += 2
            elif y2 > m:
                k2start += 2
            elif not front:
                k1_offset = v_offset + delta - k2
                if 0 <= k1_offset < v_length and v1[k1_offset] != -1:
                    x1 = v1[k1_offset]
                    y1 = v_offset + x1 - k1_offset
                    if x1 >= n - x2:
                        return x1, y1
    return None


def _common_pairs(
    a: List[str], b: List[str], a_off: int, b_off: int, pairs: List[Tuple[int, int]]
) -> None:
    """Append (index in a, index in b) for every line of an LCS of ``a`` and ``b``."""
    n, m = len(a), len(b)
    head = 0
    while head < n and head < m and a[head] == b[head]:
        head += 1
    tail = 0
    while tail < n - head and tail < m - head and a[n - 1 - tail] == b[m - 1 - tail]:
        tail += 1
    pairs.extend((a_off + i, b_off + i) for i in range(head))
    pairs.extend((a_off + n - tail + i, b_off + m - tail + i) for i in range(tail))

    a = a[head:n - tail]
    b = b[head:m - tail]
    a_off += head
    b_off += head
    if not a or not b:
        return
    if len(a) == 1:
        if a[0] in b:
            pairs.append((a_off, b_off + b.index(a[0])))
        return
    if len(b) == 1:
        if b[0] in a:
            pairs.append((a_off + a.index(b[0]), b_off))
        return

    split = _bisect(a, b)
    if split is None:
        return
    x, y = split
    _common_pairs(a[:x], b[:y], a_off, b_off, pairs)
    _common_pairs(a[x:], b[y:], a_off + x, b_off + y, pairs)


def _match_lines(old: List[str], new: List[str]) -> List[Tuple[int, int]]:
    """
    Pair up the unchanged lines of ``old`` and ``new``, in order.

    Lines found on only one side can never be kept, so they are dropped before
    the search; unrelated documents reduce to almost nothing. The search always
    runs with the lexically smaller reduced sequence first, so swapping the
    inputs mirrors the result over the same set of unchanged lines.
    """
    old_set, new_set = set(old), set(new)
    old_idx = [i for i, line in enumerate(old) if line in new_set]
    new_idx = [j for j, line in enumerate(new) if line in old_set]
    a = [old[i] for i in old_idx]
    b = [new[j] for j in new_idx]

    swapped = b < a
    if swapped:
        a, b = b, a
    pairs: List[Tuple[int, int]] = []
    _common_pairs(a, b, 0, 0, pairs)
    if swapped:
        pairs = [(y, x) for x, y in pairs]
    pairs.sort()
    return [(old_idx[x], new_idx[y]) for x, y in pairs]


def _edit_script(old: List[str], new: List[str]) -> List[Tuple[str, str]]:
    """Emit (tag, line) operations; between kept lines, removals come before additions."""
    ops: List[Tuple[str, str]] = []
    i = j = 0
    for x, y in _match_lines(old, new):
        ops.extend((REMOVE, line) for line in old[i:x])
        ops.extend((ADD, line) for line in new[j:y])
        ops.append((KEEP, old[x]))
        i, j = x + 1, y + 1
    ops.extend((REMOVE, line) for line in old[i:])
    ops.extend((ADD, line) for line in new[j:])
    return ops


def _group(ops: List[Tuple[str, str]]) -> List[DiffSegment]:
    """Collapse operations into segments; each changed hunk is removals then additions."""
    segments: List[DiffSegment] = []
    removed: List[str] = []
    added: List[str] = []

    def flush_hunk() -> None:
        if removed:
            segments.append(DiffSegment(added=False, removed=True, lines=list(removed)))
            removed.clear()
        if added:
            segments.append(DiffSegment(added=True, removed=False, lines=list(added)))
            added.clear()

    for tag, line in ops:
        if tag == REMOVE:
            removed.append(line)
        elif tag == ADD:
            added.append(line)
        else:
            flush_hunk()
            if segments and not (segments[-1].added or segments[-1].removed):
                segments[-1].lines.append(line)
            else:
                segments.append(DiffSegment(added=False, removed=False, lines=[line]))
    flush_hunk()
    return segments


def diff_lines(base_text: str, other_text: str) -> DiffResult:
    """
    Compute the line diff turning ``base_text`` into ``other_text``.

    Args:
        base_text: Text treated as the original.
        other_text: Text treated as the revision.

    Returns:
        DiffResult whose segments, concatenated per side, rebuild both inputs.
    """
    old = split_lines(base_text)
    new = split_lines(other_text)
    segments = _group(_edit_script(old, new))
    logger.debug("Diffed %d lines against %d lines into %d segments", len(old), len(new), len(segments))
    return DiffResult(segments=segments)


def render_unified(segments: List[DiffSegment]) -> str:
    """Prefix every line with ``+``, ``-`` or a space and join with newlines."""
    rendered: List[str] = []
    for segment in segments:
        for line in segment.lines:
            rendered.append(segment.prefix + line.rstrip("\n"))
    return "\n".join(rendered)


def compute_diff(base_text: str, other_text: str) -> Tuple[str, List[DiffSegment]]:
    """Return the unified rendering and the segment list for two texts."""
    result = diff_lines(base_text, other_text)
    return result.unified, result.segments
