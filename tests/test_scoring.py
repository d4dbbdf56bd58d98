"""Tests for the greedy fuzzy scorer.

Covers score arithmetic, match positions, case folding and the subsequence
contract that ranking and highlighting depend on.
"""

from __future__ import annotations

import unittest

from neopick.scoring import EMPTY_QUERY_RESULT, MatchResult, fold_text, is_boundary, score


def _is_subsequence(query: str, line: str) -> bool:
    remaining = iter(line.lower())
    return all(ch in remaining for ch in query.lower())


class ScoreArithmeticTests(unittest.TestCase):
    def test_contiguous_prefix_scores_match_consecutive_and_boundary(self) -> None:
        self.assertEqual(score("ap", "apple"), MatchResult(score=58, positions=(0, 1)))

    def test_gapped_match_pays_gap_penalty(self) -> None:
        self.assertEqual(score("ap", "grape"), MatchResult(score=33, positions=(2, 3)))

    def test_missing_character_is_no_match(self) -> None:
        self.assertIsNone(score("ap", "banana"))
        self.assertIsNone(score("zzz", "abc.py"))

    def test_separator_boundary_bonus(self) -> None:
        self.assertEqual(score("b", "foo_bar").score, 10 - 4 + 8)
        self.assertEqual(score("b", "foo/bar").score, 10 - 4 + 8)
        self.assertEqual(score("b", "foobar").score, 10 - 3)

    def test_camel_case_boundary_bonus(self) -> None:
        self.assertEqual(score("b", "fooBar").score, 10 - 3 + 8)

    def test_dense_matches_outscore_sparse_ones(self) -> None:
        dense = score("abc", "abc")
        sparse = score("abc", "axbxc")

        self.assertEqual(dense.score, 83)
        self.assertEqual(sparse.score, 51)
        self.assertGreater(dense.score, sparse.score)

    def test_negative_scores_are_still_matches(self) -> None:
        result = score("z", "a" * 20 + "z")

        self.assertEqual(result, MatchResult(score=-10, positions=(20,)))


class ScoreContractTests(unittest.TestCase):
    def test_empty_query_matches_everything_with_neutral_result(self) -> None:
        for line in ("", "apple", "  spaced  "):
            self.assertEqual(score("", line), EMPTY_QUERY_RESULT)
        self.assertEqual(EMPTY_QUERY_RESULT.score, 0)
        self.assertEqual(EMPTY_QUERY_RESULT.positions, ())

    def test_matching_is_case_insensitive(self) -> None:
        self.assertEqual(score("AP", "apple"), score("ap", "apple"))
        self.assertEqual(score("ap", "APPLE").positions, (0, 1))

    def test_greedy_match_takes_leftmost_occurrence(self) -> None:
        self.assertEqual(score("ab", "a_ab").positions, (0, 3))

    def test_positions_index_original_line_when_lowering_widens(self) -> None:
        # "İ".lower() is two characters long.
        self.assertEqual(score("x", "İx").positions, (1,))
        self.assertEqual(len(fold_text("İx")), 2)

    def test_positions_are_strictly_increasing_and_one_per_query_char(self) -> None:
        cases = [
            ("src", "lib/src/main.rs"),
            ("mn", "lib/src/main.rs"),
            ("FB", "fooBar_baz"),
            ("aaa", "banana"),
        ]
        for query, line in cases:
            result = score(query, line)
            self.assertIsNotNone(result, (query, line))
            self.assertEqual(len(result.positions), len(query))
            self.assertEqual(list(result.positions), sorted(set(result.positions)))
            for ch, pos in zip(query, result.positions):
                self.assertEqual(line[pos].lower(), ch.lower())

    def test_no_match_only_when_query_is_not_a_subsequence(self) -> None:
        lines = ["apple", "banana", "grape", "Makefile", "src/lib.rs", ""]
        queries = ["", "a", "ap", "pa", "nn", "mkf", "srs", "xyz", "elppa"]
        for query in queries:
            for line in lines:
                with self.subTest(query=query, line=line):
                    self.assertEqual(score(query, line) is not None, _is_subsequence(query, line))

    def test_scoring_is_deterministic(self) -> None:
        self.assertEqual(score("mkf", "Makefile"), score("mkf", "Makefile"))


class BoundaryTests(unittest.TestCase):
    def test_separators_start_words(self) -> None:
        for prev in "/_- ":
            self.assertTrue(is_boundary(prev, "x"))

    def test_lower_to_upper_transition_starts_word(self) -> None:
        self.assertTrue(is_boundary("o", "B"))
        self.assertFalse(is_boundary("O", "B"))
        self.assertFalse(is_boundary("o", "b"))


if __name__ == "__main__":
    unittest.main()
