import tempfile
import unittest
from pathlib import Path

from rinha.diagnostics import Report, Annotation, TooManyIssues, error_headline
from rinha.location import Location
from rinha.syntax import Error

class ReportTests(unittest.TestCase):
	
	def test_fresh_report_is_ok(self):
		report = Report()
		self.assertTrue(report.ok())
		report.assert_no_issues("Nothing should be wrong yet.")
	
	def test_runtime_error_text(self):
		report = Report()
		report.runtime_error(Error("Undefined variable", 'Undefined variable "x"', Location(3, 4, "a.rinha")))
		self.assertTrue(report.sick())
		self.assertEqual('[Error (a.rinha:3:4)] Undefined variable\nUndefined variable "x"', report.issues[0].as_text())
	
	def test_headline(self):
		self.assertEqual("[Error (f:1:2)] Oops", error_headline(Error("Oops", "", Location(1, 2, "f"))))
	
	def test_too_many_issues(self):
		report = Report(max_issues=2)
		report.no_such_file(Path("a"))
		with self.assertRaises(TooManyIssues):
			report.no_such_file(Path("b"))
	
	def test_reset(self):
		report = Report()
		report.stack_overflow(100)
		self.assertIn("100", report.issues[0].description)
		report.reset()
		self.assertTrue(report.ok())

class AnnotationTests(unittest.TestCase):
	
	def test_no_source_no_picture(self):
		ann = Annotation(Error("m", "t", Location(0, 1, "there-is-no-such-file.rinha")))
		self.assertIsNone(ann.illustrate())
	
	def test_picture_shows_the_line(self):
		with tempfile.TemporaryDirectory() as folder:
			path = Path(folder)/"src.rinha"
			path.write_text("let x = 1;\nprint(y)\n", encoding="utf-8")
			ann = Annotation(Error("m", "t", Location(17, 18, str(path))), "here")
			picture = ann.illustrate()
		self.assertIn("print(y)", picture)

if __name__ == '__main__':
	unittest.main()
