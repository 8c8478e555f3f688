"""Display-name derivation for folders and pages"""


def title_case(kebab: str) -> str:
    """Convert a kebab-case name to Title Case With Spaces ('web-tools' -> 'Web Tools').

    Only the first letter of each word is uppercased; the rest is kept as-is.
    """
    return ' '.join(w[:1].upper() + w[1:] for w in kebab.split('-'))
