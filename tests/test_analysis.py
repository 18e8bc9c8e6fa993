"""Tests for TextAnalyzer and ReaderSession."""

import unittest

from bunsekikun.services.analysis import ReaderSession, TextAnalyzer
from bunsekikun.services.errors import InputError, NotReadyError, TokenizeError
from bunsekikun.services.selection import Idle, Loaded, Loading
from bunsekikun.services.tagger import TaggerLifecycle

from tests.fakes import FakeDictionary, FakeTagger, entry


async def _never_called():
    raise AssertionError("loader should not run")


class TestTextAnalyzer(unittest.TestCase):

    def test_analyze_groups_tokens(self):
        analyzer = TextAnalyzer(TaggerLifecycle.ready(FakeTagger()))

        result = analyzer.analyze("食べたの猫たち")

        self.assertEqual(result.text, "食べたの猫たち")
        self.assertEqual([w.surface for w in result.words], ["食べたの", "猫たち"])
        self.assertEqual(result.surface, "食べたの猫たち")

    def test_blank_input(self):
        tagger = FakeTagger()
        analyzer = TextAnalyzer(TaggerLifecycle.ready(tagger))

        for text in ("", "   ", "\n\t"):
            with self.subTest(text=text), self.assertRaises(InputError):
                analyzer.analyze(text)
        self.assertEqual(tagger.calls, [])

    def test_not_ready(self):
        analyzer = TextAnalyzer(TaggerLifecycle(_never_called))
        with self.assertRaises(NotReadyError):
            analyzer.analyze("猫")

    def test_tokenize_error(self):
        analyzer = TextAnalyzer(TaggerLifecycle.ready(FakeTagger(error=RuntimeError("boom"))))
        with self.assertRaises(TokenizeError):
            analyzer.analyze("猫")

    def test_empty_token_stream_gives_empty_result(self):
        analyzer = TextAnalyzer(TaggerLifecycle.ready(FakeTagger(tokens=[])))
        self.assertEqual(len(analyzer.analyze("。")), 0)


class TestReaderSession(unittest.IsolatedAsyncioTestCase):

    def make_session(self, **entries):
        dictionary = FakeDictionary({k: [entry(k, v)] for k, v in entries.items()})
        return ReaderSession(TextAnalyzer(TaggerLifecycle.ready(FakeTagger())), dictionary)

    async def test_select_by_index(self):
        session = self.make_session(猫="cat")
        session.analyze("食べたの猫たち")

        state = session.select(1)
        await session.selection.settle()

        self.assertIsInstance(state, Loading)
        self.assertEqual(state.word.surface, "猫たち")
        self.assertIsInstance(session.outcome, Loaded)
        self.assertEqual(session.outcome.entry.slug, "猫")

    async def test_select_without_analysis(self):
        session = self.make_session()
        with self.assertRaises(IndexError):
            session.select(0)

    async def test_select_out_of_range(self):
        session = self.make_session()
        session.analyze("食べたの猫たち")
        for index in (2, -1):
            with self.subTest(index=index), self.assertRaises(IndexError):
                session.select(index)

    async def test_new_analysis_clears_selection(self):
        session = self.make_session(猫="cat")
        session.analyze("食べたの猫たち")
        session.select(1)

        session.analyze("食べたの猫たち")
        await session.selection.settle()

        self.assertIsInstance(session.outcome, Idle)

    async def test_rejected_analysis_keeps_previous_state(self):
        session = self.make_session(猫="cat")
        previous = session.analyze("食べたの猫たち")
        session.select(1)
        await session.selection.settle()
        selected = session.outcome

        with self.assertRaises(InputError):
            session.analyze("   ")
        session.analyzer.lifecycle = TaggerLifecycle(_never_called)
        with self.assertRaises(NotReadyError):
            session.analyze("犬")

        self.assertIs(session.result, previous)
        self.assertIs(session.outcome, selected)
        self.assertEqual(session.select(0).word.surface, "食べたの")

    async def test_rejected_analysis_keeps_lookup_in_flight(self):
        session = self.make_session(猫="cat")
        gate = session.dictionary.hold("猫")
        session.analyze("食べたの猫たち")
        session.select(1)

        with self.assertRaises(InputError):
            session.analyze("")
        gate.set()
        await session.selection.settle()

        self.assertIsInstance(session.outcome, Loaded)

    async def test_tokenize_failure_drops_previous_state(self):
        session = self.make_session(猫="cat")
        session.analyze("食べたの猫たち")
        session.select(1)

        session.analyzer.lifecycle = TaggerLifecycle.ready(FakeTagger(error=RuntimeError("boom")))
        with self.assertRaises(TokenizeError):
            session.analyze("猫")
        await session.selection.settle()

        self.assertIsNone(session.result)
        self.assertIsInstance(session.outcome, Idle)

    async def test_close(self):
        session = self.make_session(猫="cat")
        session.analyze("食べたの猫たち")
        session.select(0)
        session.close()
        await session.selection.settle()
        self.assertIsInstance(session.outcome, Idle)

    async def test_load_tagger(self):
        session = self.make_session()
        status = await session.load_tagger()
        self.assertEqual(status, session.tagger_status)
