"""Tagged morphemes and the words built from them.

Part-of-speech tags arrive from the tagger as Japanese strings. Both the
IPADIC tag set (kuromoji, MeCab) and the UniDic-style set used by SudachiPy
are folded into two closed enums here, so grouping rules compare enum
members instead of raw strings.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Iterator

logger = logging.getLogger(__name__)


class PartOfSpeech(StrEnum):
    """Main part-of-speech category (品詞)."""

    NOUN = "noun"                      # 名詞
    PRONOUN = "pronoun"                # 代名詞
    VERB = "verb"                      # 動詞
    ADJECTIVE = "adjective"            # 形容詞
    ADJECTIVAL_NOUN = "adjectival_noun"  # 形状詞 (na-adjective stem)
    ADVERB = "adverb"                  # 副詞
    ADNOMINAL = "adnominal"            # 連体詞
    CONJUNCTION = "conjunction"        # 接続詞
    INTERJECTION = "interjection"      # 感動詞
    AUXILIARY_VERB = "auxiliary_verb"  # 助動詞
    PARTICLE = "particle"              # 助詞
    PREFIX = "prefix"                  # 接頭詞 / 接頭辞
    SUFFIX = "suffix"                  # 接尾辞
    SYMBOL = "symbol"                  # 記号 / 補助記号
    WHITESPACE = "whitespace"          # 空白
    FILLER = "filler"                  # フィラー
    UNKNOWN = "unknown"                # 未知語
    OTHER = "other"                    # その他

    @classmethod
    def from_tag(cls, tag: str) -> "PartOfSpeech":
        """Map a tagger's main POS string onto the enum."""
        pos = POS_TAGS.get(tag)
        if pos is None:
            logger.warning("Unrecognized part-of-speech tag", extra={"tag": tag})
            return cls.OTHER
        return pos


class PosDetail(StrEnum):
    """The sub-tags (品詞細分類1) the grouping rules look at."""

    CONJUNCTIVE_PARTICLE = "conjunctive_particle"        # 接続助詞
    SENTENCE_FINAL_PARTICLE = "sentence_final_particle"  # 終助詞
    DEPENDENT = "dependent"                              # 非自立 / 非自立可能
    SUFFIX = "suffix"                                    # 接尾
    NONE = "none"                                        # *, empty
    OTHER = "other"

    @classmethod
    def from_tag(cls, tag: str | None) -> "PosDetail":
        if not tag or tag == "*":
            return cls.NONE
        return DETAIL_TAGS.get(tag, cls.OTHER)


POS_TAGS: dict[str, PartOfSpeech] = {
    "名詞": PartOfSpeech.NOUN,
    "代名詞": PartOfSpeech.PRONOUN,
    "動詞": PartOfSpeech.VERB,
    "形容詞": PartOfSpeech.ADJECTIVE,
    "形状詞": PartOfSpeech.ADJECTIVAL_NOUN,
    "副詞": PartOfSpeech.ADVERB,
    "連体詞": PartOfSpeech.ADNOMINAL,
    "接続詞": PartOfSpeech.CONJUNCTION,
    "感動詞": PartOfSpeech.INTERJECTION,
    "助動詞": PartOfSpeech.AUXILIARY_VERB,
    "助詞": PartOfSpeech.PARTICLE,
    "接頭詞": PartOfSpeech.PREFIX,
    "接頭辞": PartOfSpeech.PREFIX,
    "接尾辞": PartOfSpeech.SUFFIX,
    "記号": PartOfSpeech.SYMBOL,
    "補助記号": PartOfSpeech.SYMBOL,
    "空白": PartOfSpeech.WHITESPACE,
    "フィラー": PartOfSpeech.FILLER,
    "未知語": PartOfSpeech.UNKNOWN,
    "その他": PartOfSpeech.OTHER,
}

DETAIL_TAGS: dict[str, PosDetail] = {
    "接続助詞": PosDetail.CONJUNCTIVE_PARTICLE,
    "終助詞": PosDetail.SENTENCE_FINAL_PARTICLE,
    "非自立": PosDetail.DEPENDENT,
    "非自立可能": PosDetail.DEPENDENT,
    "接尾": PosDetail.SUFFIX,
}


@dataclass(frozen=True, slots=True)
class MorphToken:
    """A single morpheme as produced by the tagger."""

    surface: str
    reading: str
    part_of_speech: PartOfSpeech
    pos_detail_1: str = "*"
    pos_detail_2: str = "*"
    pos_detail_3: str = "*"
    conjugated_type: str = "*"
    conjugated_form: str = "*"
    base_form: str = ""

    @classmethod
    def from_tags(
        cls,
        surface: str,
        pos: str,
        pos_detail_1: str = "*",
        pos_detail_2: str = "*",
        pos_detail_3: str = "*",
        conjugated_type: str = "*",
        conjugated_form: str = "*",
        base_form: str = "",
        reading: str | None = None,
    ) -> "MorphToken":
        """Build a token from raw IPADIC-style tag strings."""
        return cls(
            surface=surface,
            reading=reading or surface,
            part_of_speech=PartOfSpeech.from_tag(pos),
            pos_detail_1=pos_detail_1,
            pos_detail_2=pos_detail_2,
            pos_detail_3=pos_detail_3,
            conjugated_type=conjugated_type,
            conjugated_form=conjugated_form,
            base_form=base_form or surface,
        )

    @property
    def detail(self) -> PosDetail:
        return PosDetail.from_tag(self.pos_detail_1)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {
            "surface": self.surface,
            "reading": self.reading,
            "pos": str(self.part_of_speech),
            "pos_detail_1": self.pos_detail_1,
            "pos_detail_2": self.pos_detail_2,
            "pos_detail_3": self.pos_detail_3,
            "conjugated_type": self.conjugated_type,
            "conjugated_form": self.conjugated_form,
            "base_form": self.base_form,
        }


@dataclass(frozen=True, slots=True)
class Word:
    """One or more contiguous tokens shown and looked up as a unit."""

    tokens: tuple[MorphToken, ...]

    def __post_init__(self) -> None:
        if not self.tokens:
            raise ValueError("Word must contain at least one token")

    @property
    def surface(self) -> str:
        return "".join(t.surface for t in self.tokens)

    @property
    def reading(self) -> str:
        return "".join(t.reading for t in self.tokens)

    @property
    def part_of_speech(self) -> PartOfSpeech:
        """POS of the head token, used for highlighting."""
        return self.tokens[0].part_of_speech

    @property
    def parts_of_speech(self) -> list[PartOfSpeech]:
        return [t.part_of_speech for t in self.tokens]

    @property
    def lookup_key(self) -> str:
        """Dictionary search term: the surface of the first token."""
        return self.tokens[0].surface

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[MorphToken]:
        return iter(self.tokens)


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Grouped words for one analyzed text."""

    text: str
    words: tuple[Word, ...] = ()

    @property
    def surface(self) -> str:
        return "".join(w.surface for w in self.words)

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[Word]:
        return iter(self.words)

    def __getitem__(self, index: int) -> Word:
        return self.words[index]
