"""
Cell-indexed numbering schemes.

Every cell numbers its faces 1, 2, 3, ... in its own notation so that
overlapping cells stay distinguishable. Cells 0-7 use one numeral system each,
cells 8-23 put a distinct symbol in front of the plain number. The 5-cell has
its own five systems.
"""
from hyperdice.polytopes import PolytopeKind

GREEK = "αβγδεζηθ"
TALLY_MARK = "●"
CELL_PREFIXES = ("x", "y", "[", "{", "*", "#", "◆", "_", "+", "~", "(", "^", "=", "@", "$")
CELL_SUFFIX = "%"

_ROMAN = ((10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"))


def to_roman(n: int) -> str:
    out = []
    for value, numeral in _ROMAN:
        while n >= value:
            out.append(numeral)
            n -= value
    return "".join(out)


def _letter(n):
    return chr(ord("A") + n - 1)


def _circled(n):
    return chr(0x2460 + n - 1)


CELL_SCHEMES = (
    str,                           # 0: arabic
    _letter,                       # 1: A, B, C ...
    to_roman,                      # 2: I, II, III ...
    lambda n: GREEK[n - 1],        # 3: greek letters
    lambda n: format(n, "03b"),    # 4: zero-padded binary
    lambda n: f"0x{n:X}",          # 5: hex
    lambda n: TALLY_MARK * n,      # 6: dot tally
    _circled,                      # 7: circled digits
)

PENTACHORON_SCHEMES = (
    str,
    _letter,
    to_roman,
    lambda n: "B" + format(n, "02b"),
    lambda n: TALLY_MARK * n,
)


def cell_face_label(cell_label: int, face_index: int) -> str:
    """Label for face ``face_index`` (0-based) of cell ``cell_label`` (0-23)."""
    n = face_index + 1
    if 0 <= cell_label < len(CELL_SCHEMES):
        return CELL_SCHEMES[cell_label](n)
    offset = cell_label - len(CELL_SCHEMES)
    if 0 <= offset < len(CELL_PREFIXES):
        return f"{CELL_PREFIXES[offset]}{n}"
    if offset == len(CELL_PREFIXES):
        return f"{n}{CELL_SUFFIX}"
    raise ValueError(f"No numbering scheme for cell {cell_label}")


def pentachoron_face_label(cell_label: int, face_index: int) -> str:
    if not 0 <= cell_label < len(PENTACHORON_SCHEMES):
        raise ValueError(f"No 5-cell numbering scheme for cell {cell_label}")
    return PENTACHORON_SCHEMES[cell_label](face_index + 1)


def face_label(kind: PolytopeKind, cell_label: int, face_index: int) -> str:
    if kind is PolytopeKind.PENTACHORON:
        return pentachoron_face_label(cell_label, face_index)
    return cell_face_label(cell_label, face_index)
