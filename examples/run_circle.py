from hypo import experiment, guess_count_correlation, guess_fitness
from hypo.adapters.circle import load_kit


def main() -> None:
    kit = load_kit()
    hypotheses = list(kit.hypotheses)
    answer = kit.answer
    probes = kit.probes

    def predict(circle, n):
        return circle.inside(probes[n])

    print("Correlation count g0, g1:", guess_count_correlation(0, 1, hypotheses, predict))
    print()

    print("Guess fitness:")
    for i in range(len(probes)):
        print(f"g{i} = {guess_fitness(i, hypotheses, predict)}")
    print()

    experiment(len(probes), hypotheses, lambda n: answer.inside(probes[n]), predict)

    print("Remaining hypotheses:")
    for circle in hypotheses:
        print(circle)


if __name__ == "__main__":
    main()
