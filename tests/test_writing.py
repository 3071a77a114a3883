import unittest

from resume_ats.resume import ExperienceItem, ProjectItem, Resume
from resume_ats.writing import HumanWritingAnalysis, analyze_human_writing


def resume_with(bullets, project_bullets=None):
    projects = [ProjectItem(name="Side project", bullets=project_bullets)] if project_bullets else None
    return Resume(experience=[ExperienceItem(title="Engineer", bullets=bullets)], projects=projects)


class HumanWritingTests(unittest.TestCase):
    def test_no_bullets_returns_neutral_defaults(self):
        analysis = analyze_human_writing(Resume())

        self.assertEqual(analysis, HumanWritingAnalysis())
        self.assertEqual(analysis.overall_human_score, 50)

    def test_repeated_openers_and_formulaic_bullets(self):
        analysis = analyze_human_writing(resume_with([
            "Developed a build service resulting in 40% faster builds",
            "Developed dashboards",
        ]))

        self.assertEqual(analysis.structure_variation, 0)
        self.assertEqual(analysis.formulaic_bullet_percentage, 50)
        self.assertEqual(analysis.ai_tells_found, [])

    def test_stock_phrases(self):
        analysis = analyze_human_writing(resume_with(
            ["Built the billing service"],
            project_bullets=["Spearheaded a migration and leveraged Kafka"],
        ))

        self.assertEqual(analysis.ai_tells_found, ["spearheaded", "leveraged"])

    def test_distinct_openers_keep_full_structure_variation(self):
        analysis = analyze_human_writing(resume_with(["Built api", "Fixed ui"]))

        self.assertEqual(analysis.structure_variation, 100)
        self.assertLessEqual(analysis.sentence_length_variation, 100)
        self.assertGreaterEqual(analysis.overall_human_score, 0)
        self.assertLessEqual(analysis.overall_human_score, 100)

    def test_markup_is_ignored(self):
        plain = analyze_human_writing(resume_with(["Led the team", "Shipped v2"]))
        marked = analyze_human_writing(resume_with(["<strong>Led</strong> the team", "Shipped v2"]))

        self.assertEqual(plain, marked)


if __name__ == "__main__":
    unittest.main()
