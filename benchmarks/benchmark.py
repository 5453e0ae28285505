import random

from pyinstrument import Profiler
from ordermaint import OrderMaintenance


def append_run(n):
    om = OrderMaintenance()
    om.insert_only(0)
    for i in range(1, n):
        om.insert_after(i - 1, i)
    return om


def same_anchor_run(n):
    om = OrderMaintenance()
    om.insert_only("anchor")
    for i in range(n):
        om.insert_after("anchor", i)
    return om


def random_run(n, seed=0):
    rnd = random.Random(seed)
    om = OrderMaintenance()
    members = [0]
    om.insert_only(0)
    for i in range(1, n):
        om.insert_after(rnd.choice(members), i)
        members.append(i)
    return om


def benchmark_large():
    N = 100_000
    runs = [("append", append_run), ("same anchor", same_anchor_run), ("random", random_run)]

    profiler = Profiler()
    profiler.start()

    for name, run in runs:
        print(f"Starting {name} ({N} inserts)...")
        om = run(N)
        print(f"  {om.stats.rebalances} rebalances, {om.stats.relabeled} tags rewritten")
    print("Computation finished.")

    profiler.stop()

    profiler.print()

    # Optional: save to HTML
    with open("ordermaint_profile.html", "w") as f:
        f.write(profiler.output_html())

if __name__ == "__main__":
    benchmark_large()
