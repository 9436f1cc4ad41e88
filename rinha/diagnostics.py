"""
Everything the interpreter has to say to a human goes through here.

A Report collects issues and, when asked, emits them on the console.
Verbose mode adds progress chatter and source illustrations.
"""
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
from boozetools.support.failureprone import SourceText, illustration

from .ontology import Phrase

class TooManyIssues(Exception):
	pass

class Report:
	_issues : list["Pic"]
	
	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues
	
	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)
	
	@property
	def issues(self): return tuple(self._issues)
	
	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)
	
	def reset(self):
		self._issues.clear()
	
	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)
	
	def complain_to_console(self):
		""" Emit all the issues to the console. """
		for i in self._issues:
			print(i.as_text(), file=sys.stderr)
		sys.stderr.flush()
	
	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(message)
	
	# Methods the loader calls:
	
	def no_such_file(self, path:Path):
		self.issue(Pic("I see no file called "+str(path), []))
	
	def broken_file(self, path:Path, reason:str):
		intro = "Something went pear-shaped while trying to read "+str(path)
		self.issue(Pic(intro, [], [reason]))
	
	# Methods the executive calls:
	
	def runtime_error(self, err):
		""" The program evaluated to an Error term. """
		anns = [Annotation(err)] if self._verbose else []
		self.issue(Pic(error_headline(err), anns, [err.full_text], banner=False))
	
	def stack_overflow(self, limit:int):
		intro = "Stack overflow: the program nested calls more deeply than %d Python frames allow."%limit
		footer = ["Try a larger --recursion-limit, or a less deeply recursive program."]
		self.issue(Pic(intro, [], footer))

def error_headline(err) -> str:
	return "[Error (%s)] %s"%(err.location, err.message)

class Annotation:
	path: str
	slice: slice
	caption: str
	def __init__(self, node:Phrase, caption:str=""):
		start, stop = node.span()
		self.path = node.path()
		self.slice = slice(start, stop)
		self.caption = caption
	def illustrate(self) -> Optional[str]:
		source = _fetch(self.path)
		if source is None: return None
		row, col = source.find_row_col(self.slice.start)
		single_line = source.line_of_text(row)
		width = self.slice.stop - self.slice.start
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=(), banner=True):
		self._intro, self._anns, self._footer = intro, anns, footer
		self._banner = banner
	@property
	def description(self): return self._intro
	def as_text(self):
		lines = [self._intro]
		if self._banner: lines.insert(0, "*"*60)
		lines.extend(self._footer)
		for ann in self._anns:
			picture = ann.illustrate()
			if picture is not None:
				lines.append(ann.path)
				lines.append(picture)
		return '\n'.join(lines)

@lru_cache(5)
def _fetch(path:str) -> Optional[SourceText]:
	if not path or not Path(path).is_file():
		return None
	with open(path, "r", encoding="utf-8") as fh:
		return SourceText(fh.read(), filename=str(path))
