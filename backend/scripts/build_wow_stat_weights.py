#!/usr/bin/env python3
"""Build the upgrade checker stat weight table.

Writes starter weights for each supported spec so the upgrade checker has
something to score with. Every spec gets both content focuses (mplus, raid)
and both damage profiles (st, aoe):

- Tanks (prot_*, vengeance_dh): TANK preset for every profile
- Healers (holy_paladin): HEAL preset for every profile
- Everyone else: DPS_ST for st, DPS_AOE for aoe

Replace per patch with real values. Keys must match item stat keys
(CRIT_RATING, HASTE_RATING, ...).

Usage:
    uv run python backend/scripts/build_wow_stat_weights.py [--output PATH]

Default output: knowledge/wow/stats_weights.json (relative to repo root)
"""
import argparse
import json
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_OUTPUT = REPO_ROOT / "knowledge" / "wow" / "stats_weights.json"

WEIGHTS_VERSION = 1

SPECS = [
    "havoc_dh",
    "vengeance_dh",
    "fire_mage",
    "frost_mage",
    "arcane_mage",
    "ret_paladin",
    "prot_paladin",
    "holy_paladin",
    "arms_warrior",
    "fury_warrior",
    "prot_warrior",
]

DPS_ST = {
    "STRENGTH": 1.0,
    "AGILITY": 1.0,
    "INTELLECT": 1.0,
    "CRIT_RATING": 0.55,
    "HASTE_RATING": 0.60,
    "MASTERY_RATING": 0.50,
    "VERSATILITY": 0.45,
    "VERSATILITY_RATING": 0.45,
}

DPS_AOE = {
    **DPS_ST,
    "HASTE_RATING": 0.65,
    "MASTERY_RATING": 0.55,
}

TANK = {
    "STRENGTH": 0.85,
    "AGILITY": 0.85,
    "STAMINA": 0.75,
    "VERSATILITY": 0.65,
    "VERSATILITY_RATING": 0.65,
    "HASTE_RATING": 0.45,
    "MASTERY_RATING": 0.55,
    "CRIT_RATING": 0.25,
    "AVOIDANCE": 0.20,
}

HEAL = {
    "INTELLECT": 1.0,
    "HASTE_RATING": 0.70,
    "CRIT_RATING": 0.60,
    "MASTERY_RATING": 0.55,
    "VERSATILITY": 0.45,
    "VERSATILITY_RATING": 0.45,
}

NOTES = (
    "Starter stat weights for the upgrade checker. Replace per patch/spec with "
    "real values. Keys must match item stat keys (CRIT_RATING, HASTE_RATING, etc)."
)


def weights_for(spec: str, profile: str) -> dict[str, float]:
    """Pick the preset for a spec and damage profile ("st" or "aoe")."""
    if spec.startswith("prot_") or spec == "vengeance_dh":
        return TANK
    if spec == "holy_paladin":
        return HEAL
    return DPS_AOE if profile == "aoe" else DPS_ST


def build_weights(specs: list[str] = SPECS) -> dict:
    """Build the full weight table document."""
    out = {"version": WEIGHTS_VERSION, "notes": NOTES, "specs": {}}
    for spec in specs:
        out["specs"][spec] = {
            focus: {
                "st": dict(weights_for(spec, "st")),
                "aoe": dict(weights_for(spec, "aoe")),
            }
            for focus in ("mplus", "raid")
        }
    return out


def write_weights(output_path: Path, specs: list[str] = SPECS) -> dict:
    """Write the weight table to ``output_path``, creating parent dirs."""
    data = build_weights(specs)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return data


def main():
    parser = argparse.ArgumentParser(description="Build the WoW upgrade checker stat weights")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT,
                        help=f"Output JSON path (default: {DEFAULT_OUTPUT})")
    args = parser.parse_args()

    data = write_weights(args.output)
    print(f"Wrote weights for {len(data['specs'])} specs to {args.output}")


if __name__ == "__main__":
    main()
