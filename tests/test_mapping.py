from blame_engine.transform import LEFT, RIGHT, Mapping, StepMap


def make_insert_map(pos: int, size: int) -> StepMap:
    return StepMap(((pos, 0, size),))


def make_delete_map(start: int, end: int) -> StepMap:
    return StepMap(((start, end - start, 0),))


def test_step_map_shifts_positions_after_insertion() -> None:
    step_map = make_insert_map(3, 2)

    assert step_map.map(1) == 1
    assert step_map.map(5) == 7


def test_step_map_bias_at_insertion_point() -> None:
    step_map = make_insert_map(3, 2)

    assert step_map.map(3, LEFT) == 3
    assert step_map.map(3, RIGHT) == 5


def test_step_map_reports_deletions() -> None:
    step_map = make_delete_map(2, 5)

    inside = step_map.map_result(4, RIGHT)
    assert inside.pos == 2
    assert inside.deleted_across is True
    assert inside.deleted is True

    at_start = step_map.map_result(2, LEFT)
    assert at_start.pos == 2
    assert at_start.deleted is False
    assert at_start.deleted_after is True

    assert step_map.map(6) == 3


def test_inverted_step_map_undoes_insertion() -> None:
    inverted = make_insert_map(2, 3).invert()

    assert inverted.map(6) == 3
    assert inverted.map(1) == 1


def test_changed_ranges_reports_new_coordinates() -> None:
    step_map = StepMap(((1, 0, 1), (5, 2, 0)))

    assert list(step_map.changed_ranges()) == [(1, 1, 1, 2), (5, 7, 6, 6)]


def test_mapping_slice_skips_leading_maps() -> None:
    mapping = Mapping([make_insert_map(0, 2), make_insert_map(10, 1)])

    assert len(mapping) == 2
    assert mapping.map(5) == 7
    assert mapping.slice(1).map(5) == 5
    assert mapping.slice(1).map(12) == 13
    assert mapping.slice(0, 1).map(12) == 14


def test_mirror_recovers_positions_in_restored_content() -> None:
    plain = Mapping([make_delete_map(2, 5), make_insert_map(2, 3)])
    mirrored = Mapping([make_delete_map(2, 5)])
    mirrored.append_map(make_insert_map(2, 3), mirrors=0)

    assert plain.map(3) == 5
    assert mirrored.map(3) == 3


def test_concat_keeps_mirror_pairs() -> None:
    restored = Mapping([make_delete_map(2, 5), make_insert_map(2, 3)], mirror=[(1, 0)])

    combined = Mapping.concat(Mapping([make_insert_map(0, 1)]), restored)

    assert len(combined) == 3
    assert combined.get_mirror(2) == 1
    assert combined.map(3) == 4


def test_step_map_json_round_trip() -> None:
    step_map = StepMap(((4, 2, 7),), inverted=True)

    data = step_map.to_json()

    assert data == {"ranges": [[4, 2, 7]], "inverted": True}
    assert StepMap.from_json(data) == step_map
