from dishle.models.letter_pool import LetterPool


def test_remove_first_takes_leftmost_occurrence():
    pool = LetterPool("BANANA")

    assert pool.remove_first("A")
    assert str(pool) == "BNANA"
    assert pool.remove_first("A")
    assert str(pool) == "BNNA"


def test_remove_missing_letter_is_refused():
    pool = LetterPool("SOUP")

    assert not pool.remove_first("Z")
    assert str(pool) == "SOUP"


def test_letter_runs_out():
    pool = LetterPool("TT")

    assert pool.remove_first("T")
    assert pool.remove_first("T")
    assert not pool.remove_first("T")
    assert str(pool) == ""


def test_spaces_are_kept_and_cannot_be_removed():
    pool = LetterPool("ICE CREAM")

    assert not pool.remove_first(" ")
    for letter in "ICECREAM":
        assert pool.remove_first(letter)

    assert str(pool) == " "
    assert pool.is_exhausted()


def test_not_exhausted_while_letters_remain():
    assert not LetterPool("SP").is_exhausted()
    assert LetterPool("").is_exhausted()
