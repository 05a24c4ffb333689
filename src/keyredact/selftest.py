"""
KeyRedact
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Optional, Tuple

from kr_engine.rewrite import transform


@dataclass(frozen=True)
class SelfTestCase:
    name: str
    source: str
    expected: str

    def run(self) -> str:
        return transform(self.source)


@dataclass(frozen=True)
class SelfTestOutcome:
    number: int
    name: str
    ok: bool
    expected: str
    actual: str


_REPLACEMENTS_INPUT = r'"key" : "value", "k2_X": "value2", "k3_X": ["abc"], "k4_X": ["a", "b","c"]'

CASES: List[SelfTestCase] = [
    SelfTestCase(
        "various inputs",
        r'"key" : "value" , "1":"2", "array0" : [], "arr1": ["hello"], "arr2":["1" , "2,"], "arr3:" : ["\"]"]',
        r'"key" : "value" , "1":"2", "array0" : [], "arr1": ["hello"], "arr2":["1" , "2,"], "arr3:" : ["\"]"]',
    ),
    SelfTestCase(
        "various replacements",
        _REPLACEMENTS_INPUT,
        r'"key" : "value", "k2_X": "*", "k3_X": ["*"], "k4_X": ["*", "*","*"]',
    ),
    SelfTestCase(
        "various edge cases",
        r'''"key" : "va\"l[ue]" ,
"k\"1[e]:,y":["[h,i]", "12:{}\"", ""]   ,   "{\] b0_X" : "v\a\"l[ue]", "key_X": ["[h,i]", "12:{}\"", ""]''',
        r'''"key" : "va\"l[ue]" ,
"k\"1[e]:,y":["[h,i]", "12:{}\"", ""]   ,   "{\] b0_X" : "*", "key_X": ["*", "*", ""]''',
    ),
    SelfTestCase(
        "hebrew",
        '"key" : "אב", "key2" : "[עברית]", "key3_X" : "עברית", "key4_X":["א"]',
        '"key" : "אב", "key2" : "[עברית]", "key3_X" : "*", "key4_X":["*"]',
    ),
    SelfTestCase(
        "curly bracketed json",
        '{"key" : "val", "key_X" : "val"}',
        '{"key" : "val", "key_X" : "*"}',
    ),
    SelfTestCase(
        "japanese",
        '"key1": " 形式 ", "key2":[" 形式 "], "key3_X": " 形式 ", "key4_X" : [" 形式 "]',
        '"key1": " 形式 ", "key2":[" 形式 "], "key3_X": "*", "key4_X" : ["*"]',
    ),
    SelfTestCase(
        "short keys",
        '"k":"val", "_X": "val2", "": ""',
        '"k":"val", "_X": "*", "": ""',
    ),
]


def _compare(case: SelfTestCase) -> Tuple[bool, str, str]:
    actual = case.run()
    return actual == case.expected, case.expected, actual


def _source_unchanged() -> Tuple[bool, str, str]:
    source = _REPLACEMENTS_INPUT
    redacted = transform(source)
    return source == _REPLACEMENTS_INPUT and redacted != source, _REPLACEMENTS_INPUT, source


def _checks() -> List[Tuple[str, Callable[[], Tuple[bool, str, str]]]]:
    checks = [(case.name, partial(_compare, case)) for case in CASES]
    checks.insert(2, ("original string unchanged", _source_unchanged))
    return checks


def run_selftest(report: Optional[Callable[[SelfTestOutcome], None]] = None) -> List[SelfTestOutcome]:
    outcomes: List[SelfTestOutcome] = []
    for number, (name, check) in enumerate(_checks(), start=1):
        ok, expected, actual = check()
        outcome = SelfTestOutcome(number=number, name=name, ok=ok, expected=expected, actual=actual)
        outcomes.append(outcome)
        if report:
            report(outcome)
    return outcomes
