import itertools
import math
import random
import sys

import pytest

from fmselect.errors import AssignmentError, ErrorCode, RoleValidationError
from fmselect.models import (
    CategoryFilter,
    ExcludeFilter,
    Footedness,
    FootednessFilter,
    PinFilter,
    Player,
    PlayerCategory,
    Role,
)
from fmselect.optimizer import (
    calculate_assignment_score,
    find_optimal_assignments,
    find_optimal_assignments_with_filters,
    is_player_eligible_for_role,
)


def _player(name, ratings=None, category=None, foot=Footedness.RIGHT):
    return Player(name=name, category=category, footedness=foot, role_ratings=ratings or {})


def _roles(*names):
    return [Role.new(name) for name in names]


def _brute_force_best(players, roles, filters=()):
    best = None
    for chosen in itertools.permutations(players, len(roles)):
        if not all(is_player_eligible_for_role(p, r, filters) for p, r in zip(chosen, roles)):
            continue
        total = math.fsum(calculate_assignment_score(p, r) for p, r in zip(chosen, roles))
        if best is None or total > best:
            best = total
    return best


def test_midfielder_and_defender_take_their_roles():
    players = [
        _player("A", {"BBM": 15, "CD(d)": 14}, PlayerCategory.CENTRAL_MIDFIELDER),
        _player("B", {"BBM": 16, "CD(d)": 12}, PlayerCategory.CENTRAL_DEFENDER),
    ]

    team = find_optimal_assignments(players, _roles("BBM", "CD(d)"))

    assert team.player_for("BBM").name == "A"
    assert team.player_for("CD(d)").name == "B"
    assert [a.role.name for a in team] == ["BBM", "CD(d)"]
    assert team.total_score() == pytest.approx(27.0)


def test_duplicate_role_is_rejected():
    players = [_player("A"), _player("B")]
    with pytest.raises(RoleValidationError) as exc:
        find_optimal_assignments(players, _roles("CD(d)", "CD(d)"))
    assert exc.value.code is ErrorCode.E506


def test_duplicate_player_is_rejected():
    with pytest.raises(RoleValidationError) as exc:
        find_optimal_assignments([_player("A"), _player("A")], _roles("GK"))
    assert exc.value.code is ErrorCode.E511


def test_wrong_foot_cannot_fill_side_role():
    players = [_player("A", {"WB(s) R": 18}, PlayerCategory.WING_BACK, Footedness.LEFT)]

    with pytest.raises(AssignmentError) as exc:
        find_optimal_assignments(players, _roles("WB(s) R"))

    assert exc.value.code is ErrorCode.E504
    assert exc.value.roles == ("WB(s) R",)


def test_both_footed_player_fills_either_side():
    player = _player("A", {"WB(s) R": 10, "WB(s) L": 11}, PlayerCategory.WING_BACK, Footedness.BOTH)
    assert is_player_eligible_for_role(player, Role.new("WB(s) R"))
    assert is_player_eligible_for_role(player, Role.new("WB(s) L"))


def test_solver_beats_greedy():
    # Greedy takes A on CM(s) (20) and leaves B on CM(d) (5): 25.
    # Optimal: A on CM(d) (18), B on CM(s) (17): 35.
    players = [
        _player("A", {"CM(s)": 20, "CM(d)": 18}),
        _player("B", {"CM(s)": 17, "CM(d)": 5}),
        _player("C", {"CM(s)": 1, "CM(d)": 1}),
    ]

    team = find_optimal_assignments(players, _roles("CM(s)", "CM(d)"))

    assert team.player_for("CM(s)").name == "B"
    assert team.player_for("CM(d)").name == "A"
    assert team.total_score() == pytest.approx(35.0)


def test_pinned_player_is_placed_even_when_outscored():
    players = [_player("A", {"CM(s)": 10}), _player("B", {"CM(s)": 15})]
    roles = _roles("CM(s)")

    assert find_optimal_assignments(players, roles).player_for("CM(s)").name == "B"

    pinned = find_optimal_assignments_with_filters(
        players, roles, [PinFilter(player_name="A", role_name="CM(s)")]
    )
    assert pinned.player_for("CM(s)").name == "A"


def test_empty_role_list_gives_empty_team():
    team = find_optimal_assignments([_player("A")], [])
    assert len(team) == 0
    assert team.total_score() == 0.0


def test_more_roles_than_players():
    with pytest.raises(AssignmentError) as exc:
        find_optimal_assignments([_player("A")], _roles("GK", "CD(d)"))

    assert exc.value.code is ErrorCode.E501
    assert len(exc.value.roles) == 1
    assert set(exc.value.roles) <= {"GK", "CD(d)"}


def test_category_blocks_role():
    players = [
        _player("Keeper", {"CD(d)": 20}, PlayerCategory.GOAL),
        _player("Defender", {"GK": 20}, PlayerCategory.CENTRAL_DEFENDER),
    ]
    team = find_optimal_assignments(players, _roles("GK", "CD(d)"))
    assert team.player_for("GK").name == "Keeper"
    assert team.player_for("CD(d)").name == "Defender"


@pytest.mark.parametrize(
    "filters",
    [
        [PinFilter(player_name="Ghost", role_name="CM(s)")],
        [PinFilter(player_name="A", role_name="GK")],
        [PinFilter(player_name="A", role_name="CM(s)"), PinFilter(player_name="A", role_name="CM(d)")],
        [PinFilter(player_name="A", role_name="CM(s)"), PinFilter(player_name="B", role_name="CM(s)")],
        [PinFilter(player_name="A", role_name="CM(s)"), ExcludeFilter(player_name="A")],
        [PinFilter(player_name="K", role_name="CM(s)")],
    ],
)
def test_pin_conflicts(filters):
    players = [
        _player("A", {"CM(s)": 10}),
        _player("B", {"CM(s)": 12}),
        _player("K", category=PlayerCategory.GOAL),
    ]

    with pytest.raises(AssignmentError) as exc:
        find_optimal_assignments_with_filters(players, _roles("CM(s)", "CM(d)"), filters)
    assert exc.value.code is ErrorCode.E507


def test_exclude_and_category_filters():
    players = [
        _player("A", {"CM(s)": 20, "CD(d)": 20}),
        _player("B", {"CM(s)": 12, "CD(d)": 3}),
        _player("C", {"CM(s)": 4, "CD(d)": 11}),
    ]
    filters = [
        ExcludeFilter(player_name="A"),
        CategoryFilter(player_name="B", allowed_categories=(PlayerCategory.CENTRAL_MIDFIELDER,)),
    ]

    team = find_optimal_assignments_with_filters(players, _roles("CM(s)", "CD(d)"), filters)

    assert team.role_for("A") is None
    assert team.player_for("CM(s)").name == "B"
    assert team.player_for("CD(d)").name == "C"


def test_footedness_filter_on_central_role():
    players = [_player("Righty", {"CM(s)": 18}), _player("Lefty", {"CM(s)": 9}, foot=Footedness.LEFT)]
    filters = [FootednessFilter(role_name="CM(s)", footedness=Footedness.LEFT)]

    team = find_optimal_assignments_with_filters(players, _roles("CM(s)"), filters)

    assert team.player_for("CM(s)").name == "Lefty"


def test_filters_can_make_the_solve_infeasible():
    players = [_player("A", {"GK": 10}), _player("B", {"GK": 8})]
    filters = [ExcludeFilter(player_name="A"), ExcludeFilter(player_name="B")]

    with pytest.raises(AssignmentError) as exc:
        find_optimal_assignments_with_filters(players, _roles("GK"), filters)
    assert exc.value.code is ErrorCode.E504


def test_ties_go_to_the_alphabetically_first_player():
    players = [_player("Zed", {"GK": 10}), _player("Abe", {"GK": 10})]
    team = find_optimal_assignments(players, _roles("GK"))
    assert team.player_for("GK").name == "Abe"


def test_solving_twice_gives_identical_teams():
    rng = random.Random(7)
    roles = _roles("CM(s)", "CM(d)", "BBM", "DLP(s)")
    players = [
        _player(f"P{i}", {role.name: float(rng.randint(5, 10)) for role in roles})
        for i in range(7)
    ]

    first = find_optimal_assignments(players, roles)
    second = find_optimal_assignments(list(reversed(players)), roles)

    assert first == second


@pytest.mark.parametrize("seed", range(8))
def test_matches_brute_force_optimum(seed):
    rng = random.Random(seed)
    roles = _roles("GK", "CD(d)", "WB(s) R", "CM(s)")
    categories = [None, PlayerCategory.GOAL, PlayerCategory.CENTRAL_DEFENDER, PlayerCategory.WING_BACK]
    players = [
        _player(
            f"P{i}",
            {role.name: round(rng.uniform(0, 20), 1) for role in roles},
            rng.choice(categories),
            rng.choice(list(Footedness)),
        )
        for i in range(6)
    ]
    filters = [ExcludeFilter(player_name="P5")] if seed % 2 else []

    best = _brute_force_best(players, roles, filters)

    if best is None:
        with pytest.raises(AssignmentError):
            find_optimal_assignments_with_filters(players, roles, filters)
        return

    team = find_optimal_assignments_with_filters(players, roles, filters)
    assert len(team) == len(roles)
    assert len({a.player.name for a in team}) == len(roles)
    assert all(is_player_eligible_for_role(a.player, a.role, filters) for a in team)
    assert team.total_score() == pytest.approx(best)


def test_near_max_scores_saturate_the_total():
    big = sys.float_info.max
    players = [
        _player("A", {"GK": big, "CD(d)": big}),
        _player("B", {"GK": big, "CD(d)": big / 2}),
    ]

    team = find_optimal_assignments(players, _roles("GK", "CD(d)"))

    assert team.player_for("CD(d)").name == "A"
    assert team.player_for("GK").name == "B"
    assert team.total_score() == big
