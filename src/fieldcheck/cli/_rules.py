"""``fieldcheck rules`` — print the built-in rule set."""

import argparse

from fieldcheck.rules import REGISTRY

# Value each rule is probed with to show its failure message
_PROBES: dict[str, str] = {
    "email": "not-an-email",
    "required": "",
    "string": "abc1",
    "creditCard": "1234",
    "cvv": "12",
    "positive": "-1",
}


def list_rules(args: argparse.Namespace) -> None:
    """Print each rule key with the message it reports on failure."""
    width = max(len(key) for key in REGISTRY)
    for key, validator in REGISTRY.items():
        message = validator(_PROBES.get(key, "")).message or ""
        print(f"{key:<{width}}  {message}")
