"""Tests for multi-candidate and recurrence-weighted ranking."""

from __future__ import annotations

import math

import pytest  # type: ignore

from lexmatch.ranking import (
    RankedItem,
    combine_recurrence,
    count_titles,
    rank,
    rank_titles,
    rank_with_recurrence,
    suggest_skills,
)
from lexmatch.scoring import score

CANDIDATES = [
    ("python", "Especialista em Python e dados"),
    ("ux", "Design gráfico e UX"),
    ("sql", "SQL para analistas"),
]


def test_end_to_end_query_returns_python_and_sql() -> None:
    ranked = rank("Python, pandas, SQL", CANDIDATES, limit=2)
    assert {item.id for item in ranked} == {"python", "sql"}
    # "SQL para analistas" is shorter, so the shared term weighs more
    assert [item.id for item in ranked] == ["sql", "python"]


def test_zero_score_candidates_are_dropped() -> None:
    ranked = rank("Python, pandas, SQL", CANDIDATES, limit=10)
    assert "ux" not in {item.id for item in ranked}
    assert all(item.score > 0 for item in ranked)


def test_pair_scope_matches_pairwise_score() -> None:
    ranked = rank("Python, pandas, SQL", CANDIDATES)
    by_id = {item.id: item.score for item in ranked}
    assert by_id["python"] == score("Python, pandas, SQL", "Especialista em Python e dados")


@pytest.mark.parametrize("limit", [0, 1, 2, 5])
def test_rank_respects_limit_and_order(limit: int) -> None:
    candidates = [(i, text) for i, text in enumerate(
        ["python sql", "python", "sql server", "excel", "python pandas sql", "sql", "r"]
    )]
    ranked = rank("python sql pandas", candidates, limit=limit)
    assert len(ranked) <= limit
    scores = [item.score for item in ranked]
    assert scores == sorted(scores, reverse=True)
    assert all(s > 0 for s in scores)


def test_ties_keep_input_order() -> None:
    ranked = rank("python", [("b", "python"), ("a", "python"), ("c", "python")])
    assert [item.id for item in ranked] == ["b", "a", "c"]


def test_empty_query_or_candidates() -> None:
    assert rank("", CANDIDATES) == []
    assert rank("python", []) == []
    assert rank("python", [("x", "")]) == []


def test_negative_limit_rejected() -> None:
    with pytest.raises(ValueError):
        rank("python", CANDIDATES, limit=-1)


def test_unknown_idf_scope_rejected() -> None:
    with pytest.raises(ValueError):
        rank("python", CANDIDATES, idf_scope="global")


def test_corpus_scope_uses_shared_idf() -> None:
    candidates = [("a", "python sql"), ("b", "python excel"), ("c", "python java")]
    ranked = rank("python sql", candidates, scheme="tfidf-raw", idf_scope="corpus")
    # "python" appears in every document so only "sql" discriminates
    assert [item.id for item in ranked] == ["a"]
    assert ranked[0].score == pytest.approx(1.0)


def test_threaded_map_step_matches_sequential() -> None:
    candidates = [(i, f"python sql item{i} " * (i % 3 + 1)) for i in range(20)]
    sequential = rank("python sql pandas", candidates, limit=20)
    threaded = rank("python sql pandas", candidates, limit=20, max_workers=4)
    assert threaded == sequential


def test_rank_returns_ranked_items() -> None:
    ranked = rank("sql", [("s", "sql")])
    assert ranked == [RankedItem(id="s", score=pytest.approx(1.0))]


# ---------------------------
# Recurrence ranking
# ---------------------------

def test_recurrence_groups_repeated_titles() -> None:
    ranked = rank_with_recurrence(
        [("Curso de Excel", 3), ("Curso de Excel", 3), ("Python Avançado", 1)]
    )
    by_text = {item.text: item for item in ranked}
    assert set(by_text) == {"Curso de Excel", "Python Avançado"}
    assert by_text["Curso de Excel"].occurrences == 3
    assert ranked[0].text == "Curso de Excel"


def test_recurrence_boost_strictly_increases_score() -> None:
    boosted = rank_with_recurrence([("Curso de Excel", 3), ("Python Avançado", 1)])
    plain = rank_with_recurrence([("Curso de Excel", 1), ("Python Avançado", 1)])
    boosted_excel = next(i for i in boosted if i.text == "Curso de Excel")
    plain_excel = next(i for i in plain if i.text == "Curso de Excel")
    assert boosted_excel.relevance == plain_excel.relevance
    assert boosted_excel.score > plain_excel.score


def test_recurrence_formula() -> None:
    ranked = rank_with_recurrence([("Curso de Excel", 3), ("Python Avançado", 1)])
    excel = ranked[0]
    # two disjoint documents: every term has idf ln(2), tf sums to 1
    assert excel.relevance == pytest.approx(math.log(2))
    assert excel.score == pytest.approx(math.log(2) * 0.6 + math.log(4) * 0.4)
    assert combine_recurrence(0.0, 0) == 0.0


def test_recurrence_grouping_is_case_insensitive() -> None:
    ranked = rank_with_recurrence([("Curso de Excel", 2), ("  curso DE excel ", 2)])
    assert len(ranked) == 1
    assert ranked[0].text == "Curso de Excel"
    assert ranked[0].occurrences == 4


def test_recurrence_sums_distinct_spellings() -> None:
    ranked = rank_with_recurrence([("Curso de Excel", 2), ("curso de excel", 3), ("Curso de Excel", 2)])
    assert len(ranked) == 1
    assert ranked[0].text == "Curso de Excel"
    assert ranked[0].occurrences == 5


def test_recurrence_excludes_token_free_documents() -> None:
    ranked = rank_with_recurrence([("!!!", 50), ("", 3), ("Excel", 1)])
    assert [item.text for item in ranked] == ["Excel"]


def test_recurrence_limit_and_sorting() -> None:
    docs = [(f"Curso {i}", i + 1) for i in range(15)]
    ranked = rank_with_recurrence(docs, limit=10)
    assert len(ranked) == 10
    scores = [item.score for item in ranked]
    assert scores == sorted(scores, reverse=True)
    assert ranked[0].text == "Curso 14"


def test_recurrence_rejects_negative_counts() -> None:
    with pytest.raises(ValueError):
        rank_with_recurrence([("Excel", -1)])


def test_count_titles_counts_records() -> None:
    titles = ["Curso de Excel", "curso de excel", None, "  ", "Python Avançado", "Curso de Excel"]
    assert count_titles(titles) == [("Curso de Excel", 3), ("Python Avançado", 1)]


def test_rank_titles_uses_record_counts() -> None:
    ranked = rank_titles(["Curso de Excel"] * 3 + ["Python Avançado"])
    assert ranked[0].text == "Curso de Excel"
    assert ranked[0].occurrences == 3


# ---------------------------
# Skill suggestions
# ---------------------------

def test_suggest_skills_ranks_overlapping_skills() -> None:
    skills = ["Python", "Excel", "Power BI", "Gestão de Projetos", "Java"]
    text = "Certificado: Python para análise com Power BI"
    suggestions = suggest_skills(text, skills)
    assert set(suggestions) == {"Python", "Power BI"}


def test_suggest_skills_limit() -> None:
    skills = [f"skill{i} python" for i in range(10)]
    assert len(suggest_skills("python", skills)) == 5
    assert suggest_skills("", skills) == []
