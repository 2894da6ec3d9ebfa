"""Test configuration and fixtures."""

import json

import logfire

# Keep spans local during tests
logfire.configure(send_to_logfire=False, console=False)


def battlenet_responses(
    account_id: int | str = 12345,
    battletag: str | None = "Player#1234",
    characters: list[dict] | None = None,
) -> dict[str, str]:
    """Helper to build raw Battle.net profile responses for tests.

    Args:
        account_id: Value of the ``id`` field
        battletag: BattleTag, or None to leave it out
        characters: Character entries, or None for an empty list

    Returns:
        Raw JSON body per profile route
    """
    battletag_body = {"battletag": battletag} if battletag is not None else {}
    return {
        "id": json.dumps({"id": account_id}),
        "battletag": json.dumps(battletag_body),
        "characters": json.dumps({"characters": characters or []}),
    }
