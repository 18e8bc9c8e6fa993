"""Regroup tagger morphemes into display words.

Rules, checked against the last token of the word being built:

- auxiliary verb after a verb (食べ + た)
- conjunctive or sentence-final particle (た + の, 行く + よ)
- dependent verb directly after a verb (読み + 始める); after て it starts
  a new word, since て is a particle
- suffix noun (猫 + たち)

Anything else starts a new word.
"""

from typing import Iterable

from bunsekikun.services.tokens import MorphToken, PartOfSpeech, PosDetail, Word

_CONTINUING_PARTICLES = frozenset({
    PosDetail.CONJUNCTIVE_PARTICLE,
    PosDetail.SENTENCE_FINAL_PARTICLE,
})


def continues_word(previous: MorphToken, current: MorphToken) -> bool:
    """Whether `current` extends the word whose last token is `previous`."""
    prev_pos = previous.part_of_speech
    pos = current.part_of_speech
    detail = current.detail
    return (
        (pos is PartOfSpeech.AUXILIARY_VERB and prev_pos is PartOfSpeech.VERB)
        or (pos is PartOfSpeech.PARTICLE and detail in _CONTINUING_PARTICLES)
        or (
            pos is PartOfSpeech.VERB
            and prev_pos is PartOfSpeech.VERB
            and detail is PosDetail.DEPENDENT
        )
        or (pos is PartOfSpeech.NOUN and detail is PosDetail.SUFFIX)
    )


def group(tokens: Iterable[MorphToken]) -> list[Word]:
    """
    Group morphemes into words in a single left-to-right pass.

    Every token lands in exactly one word, in input order; an empty input
    gives an empty list.
    """
    words: list[Word] = []
    open_word: list[MorphToken] = []

    for token in tokens:
        if open_word and not continues_word(open_word[-1], token):
            words.append(Word(tuple(open_word)))
            open_word = []
        open_word.append(token)

    if open_word:
        words.append(Word(tuple(open_word)))

    return words
