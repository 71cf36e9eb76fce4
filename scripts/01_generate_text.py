from __future__ import annotations

from char_markov import MarkovModel


def main() -> None:
    text = (
        "natural language processing (nlp) is fun. "
        "start small, iterate, and learn by coding. "
        "small models learn local structure, and local structure is fun. "
    )

    model = MarkovModel(window_length=4, seed=20)
    model.train(text)

    print(model)
    print(model.generate("nlp ", 120))


if __name__ == "__main__":
    main()
