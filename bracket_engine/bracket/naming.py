"""
Round naming by distance from the last round.
"""

KNOCKOUT_FINAL = "Final"
GROUP_FINAL = "Final Race"


def get_round_name(round_index: int, total_rounds: int, final_name: str = KNOCKOUT_FINAL) -> str:
    """
    Name a round by how far it is from the end of the bracket.

    Args:
        round_index: 0-based index among the counted rounds (a preliminary
            round is not counted)
        total_rounds: Number of counted rounds
        final_name: Name of the terminal round

    Returns:
        "Final"/"Final Race", "Semifinals", "Quarterfinals" or "Round N"
    """
    rounds_left = total_rounds - round_index
    if rounds_left == 1:
        return final_name
    if rounds_left == 2:
        return "Semifinals"
    if rounds_left == 3:
        return "Quarterfinals"
    return f"Round {round_index + 1}"
