from __future__ import annotations

import re

COMMAND_RE = re.compile(r"[MmLlHhVvCcSsQqTtAaZz]")
PATH_DATA_RE = re.compile(r"^[MmLlHhVvCcSsQqTtAaZz\d\s,.eE+-]+$")
CLASS_NAME_RE = re.compile(r"^[a-zA-Z][\w\-]*$")
_TRANSFORM_FN = r"(matrix|translate|scale|rotate|skewX|skewY)\s*\([^)]*\)"
TRANSFORM_RE = re.compile(rf"^{_TRANSFORM_FN}(\s*,?\s*{_TRANSFORM_FN})*\s*$")
HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
COLOR_FUNCTION_RES = (
    re.compile(r"^rgb\s*\(\s*\d+%?\s*,\s*\d+%?\s*,\s*\d+%?\s*\)$", re.IGNORECASE),
    re.compile(r"^rgba\s*\(\s*\d+%?\s*,\s*\d+%?\s*,\s*\d+%?\s*,\s*(0|1|0?\.\d+)\s*\)$", re.IGNORECASE),
    re.compile(r"^hsl\s*\(\s*\d+\s*,\s*\d+%\s*,\s*\d+%\s*\)$", re.IGNORECASE),
    re.compile(r"^hsla\s*\(\s*\d+\s*,\s*\d+%\s*,\s*\d+%\s*,\s*(0|1|0?\.\d+)\s*\)$", re.IGNORECASE),
)
KEYWORD_COLORS = {"none", "transparent", "currentcolor", "inherit"}
NAMED_COLORS = {
    "aliceblue", "antiquewhite", "aqua", "aquamarine", "azure", "beige", "bisque",
    "black", "blanchedalmond", "blue", "blueviolet", "brown", "burlywood",
    "cadetblue", "chartreuse", "chocolate", "coral", "cornflowerblue", "cornsilk",
    "crimson", "cyan", "darkblue", "darkcyan", "darkgoldenrod", "darkgray",
    "darkgreen", "darkgrey", "darkkhaki", "darkmagenta", "darkolivegreen",
    "darkorange", "darkorchid", "darkred", "darksalmon", "darkseagreen",
    "darkslateblue", "darkslategray", "darkslategrey", "darkturquoise",
    "darkviolet", "deeppink", "deepskyblue", "dimgray", "dimgrey", "dodgerblue",
    "firebrick", "floralwhite", "forestgreen", "fuchsia", "gainsboro",
    "ghostwhite", "gold", "goldenrod", "gray", "green", "greenyellow", "grey",
    "honeydew", "hotpink", "indianred", "indigo", "ivory", "khaki", "lavender",
    "lavenderblush", "lawngreen", "lemonchiffon", "lightblue", "lightcoral",
    "lightcyan", "lightgoldenrodyellow", "lightgray", "lightgreen", "lightgrey",
    "lightpink", "lightsalmon", "lightseagreen", "lightskyblue",
    "lightslategray", "lightslategrey", "lightsteelblue", "lightyellow", "lime",
    "limegreen", "linen", "magenta", "maroon", "mediumaquamarine", "mediumblue",
    "mediumorchid", "mediumpurple", "mediumseagreen", "mediumslateblue",
    "mediumspringgreen", "mediumturquoise", "mediumvioletred", "midnightblue",
    "mintcream", "mistyrose", "moccasin", "navajowhite", "navy", "oldlace",
    "olive", "olivedrab", "orange", "orangered", "orchid", "palegoldenrod",
    "palegreen", "paleturquoise", "palevioletred", "papayawhip", "peachpuff",
    "peru", "pink", "plum", "powderblue", "purple", "rebeccapurple", "red",
    "rosybrown", "royalblue", "saddlebrown", "salmon", "sandybrown", "seagreen",
    "seashell", "sienna", "silver", "skyblue", "slateblue", "slategray",
    "slategrey", "snow", "springgreen", "steelblue", "tan", "teal", "thistle",
    "tomato", "turquoise", "violet", "wheat", "white", "whitesmoke", "yellow",
    "yellowgreen",
}


def is_valid_color(value: str) -> bool:
    raw = value.strip()
    lowered = raw.lower()
    if lowered in KEYWORD_COLORS or lowered in NAMED_COLORS:
        return True
    if lowered.startswith("url(#") and lowered.endswith(")"):
        return True
    if HEX_RE.match(raw):
        return True
    return any(pattern.match(raw) for pattern in COLOR_FUNCTION_RES)


def is_valid_class_name(value: str) -> bool:
    return all(CLASS_NAME_RE.match(token) for token in value.split()) and bool(value.strip())


def is_valid_transform(value: str) -> bool:
    return bool(TRANSFORM_RE.match(value.strip()))


def is_valid_path_data(d: str) -> bool:
    return bool(PATH_DATA_RE.match(d))


def count_path_commands(d: str) -> int:
    return len(COMMAND_RE.findall(d))
