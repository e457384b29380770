from hypo import experiment
from hypo.adapters.number import load_kit


def main() -> None:
    kit = load_kit()
    hypotheses = list(kit.hypotheses)
    queries = []

    def oracle(n):
        queries.append(n)
        return n <= 2 or n > 5

    experiment(kit.experiments, hypotheses, oracle, lambda h, val: h.predict(val))

    print("survivors:", [str(h) for h in hypotheses])
    print("experiments:", len(queries))


if __name__ == "__main__":
    main()
