from __future__ import annotations

from pathlib import Path

from char_markov import CorpusConfig, MarkovModel, load_corpus


def main() -> None:
    corpus_path = Path(__file__).resolve().parents[1] / "data" / "sample_corpus.txt"
    text = load_corpus(corpus_path, config=CorpusConfig(normalize_whitespace=True))

    model = MarkovModel(window_length=3, seed=20)
    model.train(text)

    df = model.to_frame()
    print(f"Contexts: {len(model)}")
    print(df.sort_values("count", ascending=False).head(20).to_string(index=False))
    print()
    print(model.generate("The", 300))


if __name__ == "__main__":
    main()
