import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.features import analyze_ats  # noqa: E402
from app.features.vocabulary import ATS_CATEGORIES, ATS_KEYWORDS  # noqa: E402
from app.normalize.utils import normalize_ats_text, round_half_up  # noqa: E402

SAMPLE_RESUME = (
    "Jane Doe\n"
    "Objective: Backend engineer focused on reliable APIs.\n"
    "Education: B.Tech Computer Science, 2023.\n"
    "Skills: Python, Java, SQL, Git, React, Docker, communication, teamwork.\n"
    "Experience\n"
    "• Built a payments API serving 20,000 users.\n"
    "• Reduced database latency by 35%.\n"
    "Projects\n"
    "• Chat app with React and cloud hosting.\n"
    "Certifications: AWS Cloud Practitioner.\n"
)


def _category(report, label: str) -> int:
    for item in report.breakdown:
        if item.label == label:
            return item.score
    raise AssertionError(f"Category not found: {label}")


class AnalyzeAtsTests(unittest.TestCase):
    def test_breakdown_order_and_maxima(self):
        report = analyze_ats(SAMPLE_RESUME)
        self.assertEqual(
            [(item.label, item.max) for item in report.breakdown],
            list(ATS_CATEGORIES),
        )
        self.assertEqual(sum(item.max for item in report.breakdown), 100)

    def test_score_bounds_hold_for_varied_inputs(self):
        samples = [
            "",
            " ",
            "a",
            "\n\n\n\n\n\n\n",
            "----****••••",
            SAMPLE_RESUME,
            SAMPLE_RESUME * 20,
            " ".join(f"token{i}" for i in range(500)) + " " + " ".join(ATS_KEYWORDS),
            "Ünïcödé résumé — naïve café: 東京. ¿Qué? ¡Sí!",
        ]
        for sample in samples:
            report = analyze_ats(sample)
            self.assertGreaterEqual(report.score, 0)
            self.assertLessEqual(report.score, 100)
            self.assertEqual(report.score, min(100, sum(item.score for item in report.breakdown)))
            for item in report.breakdown:
                self.assertGreaterEqual(item.score, 0)
                self.assertLessEqual(item.score, item.max)

    def test_deterministic(self):
        first = analyze_ats(SAMPLE_RESUME)
        second = analyze_ats(SAMPLE_RESUME)
        self.assertEqual(first.model_dump(), second.model_dump())

    def test_empty_text_scores_zero_with_all_suggestions(self):
        report = analyze_ats("")
        self.assertEqual(report.score, 0)
        self.assertEqual(
            report.suggestions,
            [
                "Add missing sections: education, skills, experience, projects, objective, certifications",
                "Use bullet points for better readability",
                "Add more industry-relevant keywords",
                "Add more descriptive sentences",
                "Include quantified achievements (numbers, percentages)",
            ],
        )
        self.assertEqual(report.missing_keywords, list(ATS_KEYWORDS[:8]))

    def test_section_completeness_two_of_six(self):
        report = analyze_ats("Experience at Acme. Skills include Go.")
        self.assertEqual(_category(report, "Section Completeness"), 7)
        self.assertEqual(
            report.suggestions[0],
            "Add missing sections: education, projects, objective, certifications",
        )

    def test_section_synonyms_and_dash_normalization(self):
        report = analyze_ats("Work-Experience\nInternship at Acme\nCore Competencies")
        self.assertEqual(_category(report, "Section Completeness"), 7)

    def test_keyword_density_saturates(self):
        text = "python java javascript react sql html css git communication teamwork"
        self.assertEqual(_category(analyze_ats(text), "Keyword Density"), 25)

    def test_hyphenated_keyword_matches_after_normalization(self):
        self.assertEqual(_category(analyze_ats("Problem-solving"), "Keyword Density"), 3)

    def test_missing_keywords_are_vocabulary_ordered_prefix(self):
        report = analyze_ats("python react")
        absent = [keyword for keyword in ATS_KEYWORDS if keyword not in {"python", "react"}]
        self.assertEqual(report.missing_keywords, absent[:8])
        self.assertEqual(report.missing_keywords[:3], ["java", "javascript", "sql"])

    def test_skills_match_rounds_half_up(self):
        report = analyze_ats("alpha beta gamma delta epsilon zeta")
        self.assertEqual(_category(report, "Skills Match"), 5)

    def test_skills_match_ignores_short_and_duplicate_tokens(self):
        report = analyze_ats("go go go c; r, alpha, alpha; beta")
        # distinct tokens longer than two chars: alpha, beta
        self.assertEqual(_category(report, "Skills Match"), round_half_up(30 * 2 / 40))

    def test_formatting_signals(self):
        self.assertEqual(_category(analyze_ats("plain words"), "Formatting"), 0)
        self.assertEqual(_category(analyze_ats("a\nb\nc\nd\ne\nf"), "Formatting"), 5)
        self.assertEqual(_category(analyze_ats("• item 1\n2\n3\n4\n5\n6"), "Formatting"), 15)

    def test_grammar_counts_fragments_longer_than_three(self):
        report = analyze_ats("One sentence here. Two sentence here! Three? No.")
        self.assertEqual(_category(report, "Grammar Quality"), 3)

    def test_complete_resume_has_no_suggestions(self):
        report = analyze_ats(SAMPLE_RESUME)
        self.assertEqual(report.suggestions, [])
        self.assertEqual(_category(report, "Section Completeness"), 20)
        self.assertEqual(_category(report, "Formatting"), 15)
        self.assertNotIn("python", report.missing_keywords)


class NormalizationHelperTests(unittest.TestCase):
    def test_normalize_ats_text(self):
        self.assertEqual(normalize_ats_text("Skills:Python —  SQL\n\tGit"), "skills python sql git")

    def test_round_half_up(self):
        self.assertEqual(round_half_up(4.5), 5)
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(6.49), 6)
        self.assertEqual(round_half_up(0), 0)


if __name__ == "__main__":
    unittest.main()
