"""Tests für Konflikt-Erkennung, Bestenliste und Kombinations-Suche."""

import pytest

from data.fake_data import FakeCatalogGenerator
from models.catalog import Catalog, group_sections
from models.section import Section
from models.timeslot import TimeInterval
from solver.conflicts import conflicts, conflicts_with_any
from solver.ranking import RankedSet
from solver.search import CombinationSearch, find_best_combinations


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def iv(day: str, start: float, end: float) -> TimeInterval:
    return TimeInterval(day=day, start=start, end=end)


def sec(code: str, credits: int, *times: TimeInterval, group: str = "",
        closed: bool = False) -> Section:
    return Section(code=code, group=group, closed=closed, credits=credits,
                   schedule=tuple(times))


def make_example_catalog() -> Catalog:
    """CS1 (Mo 9-10), CS1 Gruppe B (Mo 10-11), CS2 (Mo 9-10)."""
    return Catalog(sections=[
        sec("CS1", 3, iv("Mon", 9, 10)),
        sec("CS1", 3, iv("Mon", 10, 11), group="B"),
        sec("CS2", 4, iv("Mon", 9, 10)),
    ])


def make_two_by_two_catalog() -> Catalog:
    """Zwei Kurse mit je zwei überschneidungsfreien Gruppen."""
    return Catalog(sections=[
        sec("A", 1, iv("Mon", 8, 9), group="1"),
        sec("A", 2, iv("Tue", 8, 9), group="2"),
        sec("B", 10, iv("Wed", 8, 9), group="1"),
        sec("B", 20, iv("Thu", 8, 9), group="2"),
    ])


def composition(plan) -> tuple:
    return tuple((s.code, s.group) for s in plan.sections)


# ─── Konflikt-Erkennung ───────────────────────────────────────────────────────

class TestConflicts:
    def test_touching_intervals_do_not_conflict(self):
        """9-10 und 10-11 am selben Tag → kein Konflikt."""
        assert not conflicts([iv("Mon", 9, 10)], [iv("Mon", 10, 11)])

    def test_overlap_is_conflict(self):
        """9-10.5 und 10-11 → Konflikt."""
        assert conflicts([iv("Mon", 9, 10.5)], [iv("Mon", 10, 11)])

    def test_different_days_never_conflict(self):
        assert not conflicts([iv("Mon", 9, 10)], [iv("Tue", 9, 10)])

    def test_identical_interval_conflicts(self):
        assert conflicts([iv("Wed", 9, 10)], [iv("Wed", 9, 10)])

    def test_contained_interval_conflicts(self):
        assert conflicts([iv("Fri", 8, 12)], [iv("Fri", 9, 10)])

    def test_any_pair_counts(self):
        """Ein einziges überlappendes Paar reicht."""
        a = [iv("Mon", 8, 9), iv("Wed", 14, 15.5)]
        b = [iv("Tue", 8, 9), iv("Wed", 15, 16)]
        assert conflicts(a, b)

    def test_empty_schedule_never_conflicts(self):
        assert not conflicts([], [iv("Mon", 9, 10)])
        assert not conflicts([], [])

    def test_inverted_interval_never_overlaps(self):
        """start ≥ end wird nicht abgelehnt, überschneidet sich aber mit nichts."""
        assert not conflicts([iv("Mon", 11, 9)], [iv("Mon", 9, 12)])

    @pytest.mark.parametrize("a,b", [
        ([iv("Mon", 9, 10)], [iv("Mon", 10, 11)]),
        ([iv("Mon", 9, 10.5)], [iv("Mon", 10, 11)]),
        ([iv("Mon", 9, 10)], [iv("Tue", 9, 10)]),
        ([iv("Mon", 8, 12), iv("Tue", 8, 9)], [iv("Tue", 8.5, 9.5)]),
    ])
    def test_symmetry(self, a, b):
        assert conflicts(a, b) == conflicts(b, a)

    def test_conflicts_with_any(self):
        chosen = [sec("X", 3, iv("Mon", 8, 9)), sec("Y", 3, iv("Tue", 8, 9))]
        assert conflicts_with_any(sec("Z", 3, iv("Tue", 8.5, 10)), chosen)
        assert not conflicts_with_any(sec("Z", 3, iv("Tue", 9, 10)), chosen)
        assert not conflicts_with_any(sec("Z", 3, iv("Tue", 8, 9)), [])


# ─── Gruppierung ──────────────────────────────────────────────────────────────

class TestGrouping:
    def test_groups_sorted_by_code(self):
        sections = [sec("MA1", 3), sec("CS2", 3), sec("CS1", 3), sec("MA1", 4, group="B")]
        groups = group_sections(sections)
        assert [g.code for g in groups] == ["CS1", "CS2", "MA1"]

    def test_sections_keep_catalog_order(self):
        sections = [sec("MA1", 3, group="B"), sec("CS1", 3), sec("MA1", 4, group="A")]
        ma = group_sections(sections)[1]
        assert [s.group for s in ma.sections] == ["B", "A"]

    def test_all_closed_group_offers_no_candidate(self):
        group = group_sections([sec("X", 3, closed=True), sec("X", 4, closed=True)])[0]
        assert list(group.candidates(include_closed=False)) == []
        assert len(list(group.candidates(include_closed=True))) == 2
        assert group.all_closed
        assert group.max_credits(include_closed=False) == 0

    def test_empty_input(self):
        assert group_sections([]) == []


# ─── Bestenliste ──────────────────────────────────────────────────────────────

class TestRankedSet:
    def test_sorted_descending(self):
        ranked = RankedSet(10)
        for total in [3, 7, 5, 7, 1]:
            ranked.insert([sec(f"C{total}", total)], total)
        assert [p.total_credits for p in ranked] == [7, 7, 5, 3, 1]

    def test_ties_keep_discovery_order(self):
        ranked = RankedSet(10)
        ranked.insert([sec("FIRST", 4)], 4)
        ranked.insert([sec("SECOND", 4)], 4)
        assert [p.codes for p in ranked] == [("FIRST",), ("SECOND",)]

    def test_capacity_evicts_lowest(self):
        ranked = RankedSet(2)
        ranked.insert([sec("A", 1)], 1)
        ranked.insert([sec("B", 5)], 5)
        ranked.insert([sec("C", 3)], 3)
        assert [p.total_credits for p in ranked] == [5, 3]
        assert len(ranked) == 2

    def test_eviction_removes_most_recent_of_lowest(self):
        """Bei Gleichstand am unteren Ende fliegt der zuletzt eingefügte raus."""
        ranked = RankedSet(2)
        ranked.insert([sec("A", 5)], 5)
        ranked.insert([sec("B", 3)], 3)
        ranked.insert([sec("C", 3)], 3)
        assert [p.codes for p in ranked] == [("A",), ("B",)]

    def test_exactly_one_removed_per_overflow(self):
        ranked = RankedSet(3)
        for code in "ABCD":
            ranked.insert([sec(code, 2)], 2)
        assert len(ranked) == 3
        assert [p.codes[0] for p in ranked] == ["A", "B", "C"]

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_non_positive_capacity_keeps_nothing(self, capacity):
        ranked = RankedSet(capacity)
        ranked.insert([sec("A", 5)], 5)
        assert len(ranked) == 0
        assert ranked.min_total is None

    def test_total_defaults_to_credit_sum(self):
        ranked = RankedSet(1)
        ranked.insert([sec("A", 2), sec("B", 3)])
        assert ranked.best_total == 5

    def test_insert_copies_buffer(self):
        """Spätere Änderungen am Puffer verändern den Eintrag nicht."""
        buffer = [sec("A", 2)]
        ranked = RankedSet(5)
        ranked.insert(buffer, 2)
        buffer.append(sec("B", 3))
        buffer.pop(0)
        assert ranked.entries()[0].codes == ("A",)

    def test_as_pairs(self):
        ranked = RankedSet(5)
        a = sec("A", 2)
        ranked.insert([a], 2)
        assert ranked.as_pairs() == [(2, (a,))]


# ─── Kombinations-Suche ───────────────────────────────────────────────────────

class TestCombinationSearch:
    def test_end_to_end_example(self):
        """Beste Kombination: CS1 Gruppe B + CS2 = 7; CS1 Standard + CS2 kollidiert."""
        ranked = find_best_combinations(make_example_catalog().groups(), True, 5)
        best = ranked.entries()[0]
        assert best.total_credits == 7
        assert composition(best) == (("CS1", "B"), ("CS2", ""))
        compositions = [composition(p) for p in ranked]
        assert (("CS1", ""), ("CS2", "")) not in compositions

    def test_end_to_end_full_order(self):
        ranked = find_best_combinations(make_example_catalog().groups(), True, 5)
        assert [(p.total_credits, composition(p)) for p in ranked] == [
            (7, (("CS1", "B"), ("CS2", ""))),
            (4, (("CS2", ""),)),
            (3, (("CS1", ""),)),
            (3, (("CS1", "B"),)),
            (0, ()),
        ]

    def test_completeness_two_by_two(self):
        """2 Kurse × 2 Gruppen ohne Konflikte → alle 9 Kombinationen."""
        ranked = find_best_combinations(make_two_by_two_catalog().groups(), True, 10)
        assert len(ranked) == 9
        assert [p.total_credits for p in ranked] == [22, 21, 20, 12, 11, 10, 2, 1, 0]
        for plan in ranked:
            assert plan.total_credits == sum(s.credits for s in plan.sections)

    def test_capacity_respected(self):
        ranked = find_best_combinations(make_two_by_two_catalog().groups(), True, 4)
        assert [p.total_credits for p in ranked] == [22, 21, 20, 12]

    def test_closed_group_excluded(self):
        """Kurs nur mit geschlossenen Gruppen taucht ohne geschlossene nie auf."""
        catalog = Catalog(sections=[
            sec("OPEN", 3, iv("Mon", 8, 9)),
            sec("SHUT", 5, iv("Tue", 8, 9), closed=True),
        ])
        without = find_best_combinations(catalog.groups(), False, 10)
        assert all("SHUT" not in p.codes for p in without)
        assert [p.total_credits for p in without] == [3, 0]

        with_closed = find_best_combinations(catalog.groups(), True, 10)
        assert with_closed.entries()[0].codes == ("OPEN", "SHUT")
        assert with_closed.best_total == 8

    def test_closed_alternative_skipped_open_one_used(self):
        catalog = Catalog(sections=[
            sec("X", 5, iv("Mon", 8, 9), group="A", closed=True),
            sec("X", 5, iv("Tue", 8, 9), group="B"),
        ])
        ranked = find_best_combinations(catalog.groups(), False, 10)
        assert [composition(p) for p in ranked] == [(("X", "B"),), ()]

    def test_empty_catalog_yields_empty_result(self):
        """Ohne Kurse gibt es nichts zu kombinieren."""
        ranked = find_best_combinations([], True, 10)
        assert len(ranked) == 0

    def test_only_closed_courses_leave_empty_plan(self):
        """Kurse vorhanden, aber nichts wählbar → nur die leere Kombination."""
        catalog = Catalog(sections=[sec("X", 3, iv("Mon", 8, 9), closed=True)])
        ranked = find_best_combinations(catalog.groups(), False, 10)
        assert [p.sections for p in ranked] == [()]

    @pytest.mark.parametrize("max_options", [0, -3])
    def test_non_positive_max_options(self, max_options):
        ranked = find_best_combinations(make_example_catalog().groups(), True, max_options)
        assert len(ranked) == 0

    def test_idempotent(self):
        groups = FakeCatalogGenerator(seed=7).generate().groups()
        first = find_best_combinations(groups, True, 10)
        second = find_best_combinations(groups, True, 10)
        assert sorted((p.total_credits, p.codes) for p in first) == \
            sorted((p.total_credits, p.codes) for p in second)

    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    @pytest.mark.parametrize("include_closed", [True, False])
    def test_pruning_does_not_change_result(self, seed, include_closed):
        groups = FakeCatalogGenerator(seed=seed).generate(num_courses=7).groups()
        pruned = CombinationSearch(groups, include_closed, 5, prune=True)
        plain = CombinationSearch(groups, include_closed, 5, prune=False)
        assert pruned.run().as_pairs() == plain.run().as_pairs()
        assert plain.stats.pruned == 0

    @pytest.mark.parametrize("seed", [11, 12, 13])
    def test_capacity_and_order_invariant(self, seed):
        groups = FakeCatalogGenerator(seed=seed).generate().groups()
        for max_options in (1, 3, 10):
            ranked = find_best_combinations(groups, True, max_options)
            totals = [p.total_credits for p in ranked]
            assert len(ranked) <= max_options
            assert totals == sorted(totals, reverse=True)

    def test_best_is_true_optimum(self):
        """Beste Kombination entspricht dem Maximum aller konfliktfreien Teilmengen."""
        groups = FakeCatalogGenerator(seed=3).generate(num_courses=5).groups()
        everything = find_best_combinations(groups, True, 10_000, prune=False)
        best = find_best_combinations(groups, True, 1)
        assert best.best_total == everything.best_total

    def test_stats_counted(self):
        search = CombinationSearch(make_example_catalog().groups(), True, 5, prune=False)
        search.run()
        assert search.stats.candidates == 5
        assert search.stats.conflicts == 1
        assert search.stats.nodes > search.stats.candidates
