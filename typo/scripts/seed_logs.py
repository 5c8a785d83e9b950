#!/usr/bin/env python3
"""
Seed the execution log with sample runs for trying out /stats and /suggest.
"""
import random
import sys
import time
import uuid
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from typo.config import ConfigManager
from typo.insights import Action, ExecutionLogEntry, ExecutionLogStore, JsonFileLogPersistence


SAMPLE_ACTIONS = [
    Action(
        id="fix-grammar",
        name="Fix Grammar",
        icon="pencil",
        prompt="Fix the grammar and spelling errors in the following text. "
               "Return only the corrected text without explanations:",
    ),
    Action(
        id="shorten-text",
        name="Shorten Text",
        icon="arrow.down.left.and.arrow.up.right",
        prompt="Shorten the following text while keeping the key points and meaning. "
               "Return only the shortened text:",
    ),
    Action(
        id="translate-spanish",
        name="Translate to Spanish",
        icon="globe.americas",
        prompt="Translate the following text to Spanish. Return only the translation:",
    ),
]

# Per action: (runs, failure probability, typical duration in ms)
PROFILES = {
    "fix-grammar": (12, 0.1, 1800),
    "shorten-text": (10, 0.5, 2500),
    "translate-spanish": (8, 0.0, 14000),
}

ERRORS = [
    "Request timeout after 30s",
    "Invalid API key",
    "Network connection lost",
    "No text selected",
]


def seed_entries(store: ExecutionLogStore, rng: random.Random) -> int:
    """Append sample runs for every sample action."""
    now = time.time()
    count = 0
    for action in SAMPLE_ACTIONS:
        runs, failure_rate, duration = PROFILES[action.id]
        for index in range(runs):
            success = rng.random() >= failure_rate
            store.append(ExecutionLogEntry(
                id=str(uuid.uuid4()),
                timestamp=now - (runs - index) * 60,
                action_id=action.id,
                action_name=action.name,
                prompt=action.prompt,
                provider="openai",
                model_id="gpt-4o-mini",
                duration_ms=max(0.0, rng.gauss(duration, duration * 0.2)),
                input_length=rng.randint(20, 400),
                output_length=rng.randint(20, 400) if success else 0,
                success=success,
                error_message=None if success else rng.choice(ERRORS),
            ))
            count += 1
    return count


def main():
    """Run log seeding."""
    config = ConfigManager()
    log_file = Path(config.insights.log_file).expanduser()
    print(f"Execution log: {log_file}")

    store = ExecutionLogStore(
        JsonFileLogPersistence(log_file),
        max_entries=config.insights.max_entries,
    )
    added = seed_entries(store, random.Random(42))

    print(f"Added {added} runs, log now holds {len(store)} entries")
    print("\nTry: typo -c '/stats Shorten Text'")


if __name__ == "__main__":
    main()
