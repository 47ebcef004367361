"""Tests for local keyword extraction and overlap scoring."""
from core.keywords import (
    contains_term,
    extract_keywords,
    keyword_matches,
    match_score,
    overlap_score,
    term_set,
    tokenize,
)

JOB_DESCRIPTION = """
Senior Python Engineer. You will build data pipelines in Python and SQL.
Experience with AWS and Kubernetes is a plus. Strong Python and SQL skills required;
machine learning experience welcome. Familiarity with C++ and node.js helps.
"""


class TestTokenize:

    def test_drops_stopwords_and_numbers(self):
        tokens = tokenize("The team has 5 years of Python experience")

        assert "the" not in tokens
        assert "5" not in tokens
        assert "python" in tokens

    def test_keeps_symbols_in_tech_terms(self):
        tokens = tokenize("C++, C# and Node.js")

        assert "c++" in tokens
        assert "c#" in tokens
        assert "node.js" in tokens

    def test_empty_text(self):
        assert tokenize("") == []
        assert tokenize(None) == []


class TestExtractKeywords:

    def test_most_frequent_terms_first(self):
        keywords = extract_keywords(JOB_DESCRIPTION)

        assert keywords[:3] == ["python sql", "python", "sql"]
        assert "aws" in keywords
        assert "kubernetes" in keywords

    def test_repeated_phrases_included(self):
        text = "machine learning platform. machine learning models. python"
        assert "machine learning" in extract_keywords(text)

    def test_limit(self):
        assert len(extract_keywords(JOB_DESCRIPTION, limit=3)) == 3

    def test_no_duplicates(self):
        keywords = extract_keywords(JOB_DESCRIPTION)
        assert len(keywords) == len(set(keywords))

    def test_empty_text_returns_empty_list(self):
        assert extract_keywords("   ") == []


class TestKeywordMatching:

    def test_contains_term_is_whole_word(self):
        assert contains_term("Expert in Java and Spring", "java")
        assert not contains_term("Expert in JavaScript", "java")
        assert not contains_term("Wrote C++ services", "c")

    def test_keyword_matches_splits_found_and_missing(self):
        result = keyword_matches("Python developer with SQL", ["python", "sql", "aws"])

        assert result == {"matched": ["python", "sql"], "missing": ["aws"]}

    def test_match_score_percentage(self):
        assert match_score("python sql", ["python", "sql", "aws", "gcp"]) == 50
        assert match_score("anything", []) == 0


class TestOverlap:

    def test_term_set_tokenizes_every_part(self):
        terms = term_set(["Python", "AWS Lambda"], ["Data Engineer"])
        assert {"python", "aws", "lambda", "data", "engineer"} <= terms

    def test_jaccard_overlap(self):
        assert overlap_score({"a", "b"}, {"b", "c"}) == 1 / 3
        assert overlap_score({"a"}, {"a"}) == 1.0

    def test_empty_sets_score_zero(self):
        assert overlap_score(set(), {"a"}) == 0.0
