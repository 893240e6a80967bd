PEAK = "Peak"
MINIMUM = "Min"


def format_emission_label(kind: str, market_ratio: float, total_emissions: float) -> str:
    """Annotation for an extremum on the emissions-vs-market-ratio chart"""
    return "%s: (%.3f, %.1f tons)" % (kind, market_ratio, total_emissions)


def format_share_label(kind: str, t: float, share: float) -> str:
    """Annotation for an extremum on the share evolution chart; ``share`` is a fraction"""
    return "%s: %.1f years\nShare: %.1f%%" % (kind, t, share * 100)
