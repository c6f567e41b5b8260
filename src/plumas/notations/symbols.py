"""Known-symbol tables.

Bare identifiers with a fixed translation. Values are written in the target
notation already and are trusted as-is.
"""

_GREEK_LOWER = (
    "alpha beta gamma delta epsilon zeta eta theta iota kappa lambda mu nu xi "
    "pi rho sigma tau upsilon phi chi psi omega"
).split()

_GREEK_UPPER = "Gamma Delta Theta Lambda Xi Pi Sigma Upsilon Phi Psi Omega".split()

_GREEK_VARIANTS = "varepsilon vartheta varpi varrho varsigma varphi".split()

GREEK_SYMBOLS: dict[str, str] = {
    name: f"\\{name}" for name in (*_GREEK_LOWER, *_GREEK_UPPER, *_GREEK_VARIANTS)
}
# `lambda` is a Python keyword, so captured source spells it `lambda_`
GREEK_SYMBOLS["lambda_"] = "\\lambda"

LATEX_SYMBOLS: dict[str, str] = {
    **GREEK_SYMBOLS,
    "inf": "\\infty",
    "infinity": "\\infty",
    "partial": "\\partial",
    "nabla": "\\nabla",
    "ell": "\\ell",
    "hbar": "\\hbar",
    "cdots": "\\cdots",
    "ldots": "\\ldots",
}

HTML_ENTITIES: dict[str, str] = {
    name: f"&{name};"
    for name in (
        "nbsp",
        "amp",
        "lt",
        "gt",
        "quot",
        "copy",
        "reg",
        "trade",
        "mdash",
        "ndash",
        "hellip",
        "laquo",
        "raquo",
        "middot",
        "bull",
        "times",
        "deg",
    )
}
