"""CLI listing: prints the registered strategies to the console."""

from stratdispatch.strategy.registry import StrategyRegistry


def print_registry(registry: StrategyRegistry) -> str:
    """Format and print every family and its strategy keys.

    Args:
        registry: The registry built at startup.

    Returns:
        The formatted string (also printed to stdout).
    """
    families = registry.families()
    state = "sealed" if registry.sealed else "open"

    lines = [
        "──────────────── stratdispatch Registry ────────────────",
        f"  Strategies:      {len(registry)}",
        f"  Families:        {len(families)}",
        f"  State:           {state}",
        f"  Duplicate keys:  {registry.duplicate_policy}",
    ]
    for family in families:
        lines.append(f"  [{family.name}]")
        for key in registry.keys(family):
            impl = registry.resolve(family, key)
            lines.append(f"    {key:<14} {type(impl).__name__}")
    lines.append("────────────────────────────────────────────────────────")

    output = "\n".join(lines)
    print(output)
    return output
