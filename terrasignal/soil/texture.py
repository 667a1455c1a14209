"""Simplified USDA soil-texture classification."""

TEXTURE_CLASSES: tuple[str, ...] = (
    "Sand",
    "Loamy Sand",
    "Sandy Loam",
    "Loam",
    "Silt Loam",
    "Silt",
    "Sandy Clay Loam",
    "Clay Loam",
    "Silty Clay Loam",
    "Sandy Clay",
    "Silty Clay",
    "Clay",
)


def classify_texture(sand: float, silt: float, clay: float) -> str:
    """Return the texture class for the given sand/silt/clay percentages.

    The rules form a decision tree evaluated top to bottom; the first
    matching branch wins, so clay thresholds take precedence over silt and
    sand. Fractions are not checked to sum to 100.
    """
    if clay >= 40:
        if sand >= 45:
            return "Sandy Clay"
        if silt >= 40:
            return "Silty Clay"
        return "Clay"
    if clay >= 27:
        if 20 <= sand <= 45:
            return "Clay Loam"
        if sand < 20:
            return "Silty Clay Loam"
        return "Sandy Clay Loam"
    if silt >= 50:
        if clay >= 12:
            return "Silt Loam"
        return "Silt"
    if sand >= 85:
        return "Sand"
    if sand >= 70:
        return "Loamy Sand"
    if 7 <= clay < 27 and sand >= 43:
        return "Sandy Loam"
    return "Loam"
