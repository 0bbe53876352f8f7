"""Display labels for stat keys."""

STAT_LABELS: dict[str, str] = {
    # Primary
    "STRENGTH": "Strength",
    "AGILITY": "Agility",
    "INTELLECT": "Intellect",
    "STAMINA": "Stamina",

    # Secondary (item dump keys)
    "CRIT_RATING": "Crit Rating",
    "HASTE_RATING": "Haste Rating",
    "MASTERY_RATING": "Mastery Rating",
    "VERSATILITY": "Versatility",
    "VERSATILITY_RATING": "Versatility Rating",

    # Secondary (stat-priority keys)
    "crit": "Crit",
    "haste": "Haste",
    "mastery": "Mastery",
    "vers": "Vers",

    # Tertiary
    "LEECH": "Leech",
    "AVOIDANCE": "Avoidance",
    "SPEED": "Speed",
}


def label_for_stat(key: str) -> str:
    """Get a display label for a stat key.

    Unknown keys are title-cased from their underscore form, so
    "CORRUPTION_RESISTANCE" becomes "Corruption Resistance".
    """
    if not key:
        return "Unknown Stat"
    if key in STAT_LABELS:
        return STAT_LABELS[key]
    return " ".join(part[:1].upper() + part[1:] for part in key.lower().split("_") if part)
