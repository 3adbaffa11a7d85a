"""Whole-word profanity masking for chirp bodies."""

PROFANE_WORDS = ("kerfuffle", "sharbert", "fornax")
MASK = "****"


def clean_body(body: str, profane_words=PROFANE_WORDS) -> str:
    """
    Replace every space-separated word whose lower-case form is profane.
    Words carrying punctuation or suffixes ("fornax!", "fornaxes") are kept.
    """
    banned = {w.lower() for w in profane_words}
    words = body.split(" ")
    return " ".join(MASK if word.lower() in banned else word for word in words)
