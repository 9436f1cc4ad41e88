import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from rinha import cmdline, front_end
from rinha.evaluator import run_program
from rinha.syntax import Int, Str, Var, Function, Call, Let, Error

base_folder = Path(__file__).parent.parent
example_folder = base_folder/"examples"

def _good(which):
	return front_end.parse_text((example_folder/(which+".json")).read_text(encoding="utf-8"))

class ExampleSmokeTests(unittest.TestCase):
	""" Run all the examples; Test for no smoke. """
	
	def test_examples(self):
		for name, expect, output in [
			("hello", Str, ["Hello world"]),
			("fib", Int, ["55"]),
			("tuple", Str, ["1", "two"]),
			("undefined", Error, []),
		]:
			with self.subTest(name):
				printed = []
				result = run_program(_good(name), printed.append)
				self.assertIsInstance(result, expect)
				self.assertEqual(output, printed)

class CommandLineTests(unittest.TestCase):
	
	def run_cli(self, *argv):
		with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
			with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
				status = cmdline.run(cmdline.parser.parse_args(list(argv)))
		return status, out.getvalue(), err.getvalue()
	
	def test_prints_go_to_stdout(self):
		status, out, err = self.run_cli(str(example_folder/"fib.json"))
		self.assertEqual((0, "55\n", ""), (status, out, err))
	
	def test_error_result(self):
		status, out, err = self.run_cli(str(example_folder/"undefined.json"))
		self.assertEqual(1, status)
		self.assertEqual("", out)
		self.assertEqual('[Error (undefined.rinha:4:8)] Undefined variable\nUndefined variable "nope"\n', err)
	
	def test_wrong_argument_count_is_not_a_failure(self):
		for argv in [(), ("a.json", "b.json")]:
			with self.subTest(argv):
				status, out, err = self.run_cli(*argv)
				self.assertEqual(0, status)
				self.assertIn("usage:", err)
				self.assertEqual("", out)
	
	def test_missing_file(self):
		status, _, err = self.run_cli(str(example_folder/"no-such-thing.json"))
		self.assertEqual(1, status)
		self.assertIn("no-such-thing.json", err)
	
	def test_verbose_chatter(self):
		status, out, err = self.run_cli("-v", str(example_folder/"hello.json"))
		self.assertEqual((0, "Hello world\n"), (status, out))
		self.assertIn("Loading", err)
		self.assertIn("Evaluating hello.rinha", err)
	
	def test_runaway_recursion_is_reported(self):
		loop = Let(Var("f"), Function([Var("n")], Call(Var("f"), [Var("n")])), Call(Var("f"), [Int(1)]))
		doc = {"name": "loop.rinha", "expression": front_end.as_document(loop), "location": {"start": 0, "end": 0, "filename": "loop.rinha"}}
		with tempfile.TemporaryDirectory() as folder:
			path = Path(folder)/"loop.json"
			path.write_text(json.dumps(doc), encoding="utf-8")
			status, _, err = self.run_cli("--recursion-limit", "400", str(path))
		self.assertEqual(1, status)
		self.assertIn("Stack overflow", err)
	
	def test_deeply_nested_program_loads(self):
		status, out, err = self.run_nested_lets(400)
		self.assertEqual((0, "400\n", ""), (status, out, err))
	
	def test_too_deep_to_read_is_a_broken_file(self):
		status, out, err = self.run_nested_lets(400, "--recursion-limit", "600")
		self.assertEqual((1, ""), (status, out))
		self.assertIn("nested too deeply", err)
	
	def test_recursion_limit_default(self):
		self.assertEqual(20000, cmdline.parser.parse_args(["x.json"]).recursion_limit)
	
	def run_nested_lets(self, depth, *options):
		where = {"start": 0, "end": 0, "filename": "deep.rinha"}
		tree = {"kind": "Print", "value": {"kind": "Int", "value": depth, "location": where}, "location": where}
		for i in range(depth):
			tree = {"kind": "Let", "name": {"text": "v%d"%i, "location": where}, "value": {"kind": "Int", "value": i, "location": where}, "next": tree, "location": where}
		doc = {"name": "deep.rinha", "expression": tree, "location": where}
		with tempfile.TemporaryDirectory() as folder:
			path = Path(folder)/"deep.json"
			path.write_text(json.dumps(doc), encoding="utf-8")
			return self.run_cli(*options, str(path))
	
	def test_main_exits(self):
		with mock.patch("sys.stderr", new_callable=io.StringIO):
			with self.assertRaises(SystemExit) as cm:
				cmdline.main([])
		self.assertEqual(0, cm.exception.code)

if __name__ == '__main__':
	unittest.main()
