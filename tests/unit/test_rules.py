from edge_shift_puzzle.game import ScoringRules, Stats, StatsDelta


def test_single_interior_clear_scores_103():
    assert ScoringRules().move_score(3, 1, 0) == 103


def test_combo_and_edge_bonuses():
    rules = ScoringRules()
    assert rules.move_score(4, 0, 0) == 4
    # 2 lines, one of them on an edge: 4 + 200 + 50 + 50
    assert rules.move_score(4, 2, 1) == 304
    assert rules.clear_score(3, 0) == 300 + 100
    assert rules.clear_score(0, 0) == 0


def test_stats_apply_sums_and_tracks_max_combo():
    stats = Stats()
    stats = stats.apply(StatsDelta.for_move(score=304, placed_cells=4, rows=1, cols=1, edge_count=1))
    stats = stats.apply(StatsDelta.for_move(score=5, placed_cells=5, rows=0, cols=0, edge_count=0))
    assert stats == Stats(
        moves=2,
        score=309,
        total_placed_blocks=9,
        rows_cleared=1,
        cols_cleared=1,
        edge_shifts=1,
        max_combo=2,
    )


def test_cascade_delta_does_not_count_a_move():
    delta = StatsDelta.for_cascade(score=150, rows=1, cols=0, edge_count=1, max_combo=1)
    stats = Stats(moves=3).apply(delta)
    assert stats.moves == 3
    assert stats.score == 150
    assert StatsDelta().is_empty
    assert not delta.is_empty
