"""Tests for token and word types."""

import unittest

from bunsekikun.services.tokens import (
    AnalysisResult,
    MorphToken,
    PartOfSpeech,
    PosDetail,
    Word,
)

from tests.fakes import SAMPLE_TOKENS, tok


class TestPartOfSpeech(unittest.TestCase):

    def test_ipadic_and_unidic_tags(self):
        self.assertIs(PartOfSpeech.from_tag("名詞"), PartOfSpeech.NOUN)
        self.assertIs(PartOfSpeech.from_tag("助動詞"), PartOfSpeech.AUXILIARY_VERB)
        self.assertIs(PartOfSpeech.from_tag("接頭詞"), PartOfSpeech.PREFIX)
        self.assertIs(PartOfSpeech.from_tag("接頭辞"), PartOfSpeech.PREFIX)
        self.assertIs(PartOfSpeech.from_tag("補助記号"), PartOfSpeech.SYMBOL)

    def test_unrecognized_tag_maps_to_other(self):
        with self.assertLogs("bunsekikun.services.tokens", level="WARNING"):
            self.assertIs(PartOfSpeech.from_tag("謎"), PartOfSpeech.OTHER)


class TestPosDetail(unittest.TestCase):

    def test_referenced_sub_tags(self):
        self.assertIs(PosDetail.from_tag("接続助詞"), PosDetail.CONJUNCTIVE_PARTICLE)
        self.assertIs(PosDetail.from_tag("終助詞"), PosDetail.SENTENCE_FINAL_PARTICLE)
        self.assertIs(PosDetail.from_tag("非自立"), PosDetail.DEPENDENT)
        self.assertIs(PosDetail.from_tag("非自立可能"), PosDetail.DEPENDENT)
        self.assertIs(PosDetail.from_tag("接尾"), PosDetail.SUFFIX)

    def test_empty_and_other(self):
        self.assertIs(PosDetail.from_tag("*"), PosDetail.NONE)
        self.assertIs(PosDetail.from_tag(""), PosDetail.NONE)
        self.assertIs(PosDetail.from_tag(None), PosDetail.NONE)
        self.assertIs(PosDetail.from_tag("格助詞"), PosDetail.OTHER)


class TestMorphToken(unittest.TestCase):

    def test_reading_falls_back_to_surface(self):
        token = MorphToken.from_tags("ニャーニャー", "副詞")
        self.assertEqual(token.reading, "ニャーニャー")
        self.assertEqual(token.base_form, "ニャーニャー")

    def test_detail_property(self):
        self.assertIs(tok("たち", "名詞", "接尾").detail, PosDetail.SUFFIX)

    def test_immutable(self):
        token = tok("猫", "名詞")
        with self.assertRaises(AttributeError):
            token.surface = "犬"

    def test_to_dict(self):
        data = tok("猫", "名詞", "一般", reading="ネコ").to_dict()
        self.assertEqual(data["surface"], "猫")
        self.assertEqual(data["reading"], "ネコ")
        self.assertEqual(data["pos"], "noun")
        self.assertEqual(data["pos_detail_1"], "一般")


class TestWord(unittest.TestCase):

    def test_empty_word_rejected(self):
        with self.assertRaises(ValueError):
            Word(())

    def test_derived_fields(self):
        w = Word(tuple(SAMPLE_TOKENS[:3]))
        self.assertEqual(w.surface, "食べたの")
        self.assertEqual(w.lookup_key, "食べ")
        self.assertIs(w.part_of_speech, PartOfSpeech.VERB)
        self.assertEqual(
            w.parts_of_speech,
            [PartOfSpeech.VERB, PartOfSpeech.AUXILIARY_VERB, PartOfSpeech.PARTICLE],
        )
        self.assertEqual(len(w), 3)

    def test_equal_words_are_still_equal_values(self):
        a = Word((tok("猫", "名詞"),))
        b = Word((tok("猫", "名詞"),))
        self.assertEqual(a, b)


class TestAnalysisResult(unittest.TestCase):

    def test_surface_and_indexing(self):
        words = (Word(tuple(SAMPLE_TOKENS[:3])), Word(tuple(SAMPLE_TOKENS[3:])))
        result = AnalysisResult(text="食べたの猫たち", words=words)
        self.assertEqual(result.surface, "食べたの猫たち")
        self.assertEqual(len(result), 2)
        self.assertEqual(result[1].surface, "猫たち")
        self.assertEqual(list(result), list(words))
