from __future__ import annotations

import random

import pytest

from domain.models import Event, LaidOutEvent
from domain.services.layout_checks import events_overlap, find_column_collisions
from domain.services.pack_columns import iter_clusters, pack_columns
from domain.services.sort_events import sort_events

SEEDS = list(range(12))


def _random_day(rng: random.Random, count: int, *, distinct_starts: bool = False) -> list[Event]:
    if distinct_starts:
        starts = rng.sample(range(0, 720), count)
    else:
        starts = [rng.randrange(0, 720, 15) for _ in range(count)]
    return [
        Event(start=start, end=start + rng.randrange(15, 180, 15), event_id=index)
        for index, start in enumerate(starts)
    ]


def _assignment_by_interval(laid_out: list[LaidOutEvent]) -> dict[tuple[int, int], tuple[int, int]]:
    return {(event.start, event.end): (event.column, event.column_count) for event in laid_out}


@pytest.mark.parametrize("seed", SEEDS)
def test_events_in_same_column_never_collide(seed: int) -> None:
    rng = random.Random(seed)
    laid_out = pack_columns(_random_day(rng, 40))
    assert find_column_collisions(laid_out) == []


@pytest.mark.parametrize("seed", SEEDS)
def test_every_event_after_the_first_overlaps_its_cluster(seed: int) -> None:
    rng = random.Random(seed)
    for cluster in iter_clusters(sort_events(_random_day(rng, 40))):
        running_max = cluster.events[0].end
        for assigned in cluster.events[1:]:
            assert assigned.start < running_max
            running_max = max(running_max, assigned.end)
        assert running_max == cluster.max_end


@pytest.mark.parametrize("seed", SEEDS)
def test_new_column_opens_only_when_no_column_is_free(seed: int) -> None:
    rng = random.Random(seed)
    for cluster in iter_clusters(sort_events(_random_day(rng, 40))):
        column_ends: list[int] = []
        for assigned in cluster.events:
            free = [index for index, end in enumerate(column_ends) if assigned.start > end]
            if free:
                assert assigned.column == free[0]
                column_ends[assigned.column] = assigned.end
            else:
                assert assigned.column == len(column_ends)
                column_ends.append(assigned.end)
        assert len(column_ends) == cluster.column_count


@pytest.mark.parametrize("seed", SEEDS)
def test_layout_is_idempotent(seed: int) -> None:
    rng = random.Random(seed)
    events = _random_day(rng, 30)
    assert pack_columns(events) == pack_columns(list(events))


@pytest.mark.parametrize("seed", SEEDS)
def test_shuffled_input_gives_same_assignment(seed: int) -> None:
    rng = random.Random(seed)
    events = _random_day(rng, 30, distinct_starts=True)
    shuffled = list(events)
    rng.shuffle(shuffled)
    assert _assignment_by_interval(pack_columns(events)) == _assignment_by_interval(
        pack_columns(shuffled)
    )


@pytest.mark.parametrize("seed", SEEDS)
def test_events_in_different_clusters_never_overlap(seed: int) -> None:
    rng = random.Random(seed)
    clusters = list(iter_clusters(sort_events(_random_day(rng, 40))))
    for index, cluster in enumerate(clusters):
        for later in clusters[index + 1 :]:
            for first in cluster.events:
                for second in later.events:
                    assert not events_overlap(first, second)
