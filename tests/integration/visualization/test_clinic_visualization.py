"""Visual check of a default clinic run.

Runs the default clinic, samples queue lengths at every dispatched event and
saves raw data (CSV via pandas) plus matplotlib charts under test_output/.

Output:
    test_output/test_clinic_visualization/<test_name>/...
"""

from __future__ import annotations

import pandas as pd
import pytest

from clinicsim import ClinicNetwork, NetworkConfig


def test_queue_lengths_over_time(test_output_dir):
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    samples = []
    holder = {}

    def sample(time, kind, ids):
        network = holder["network"]
        row = {"time": time, "kind": str(kind), "reception": len(network.reception_queue)}
        for office in network.offices:
            row[office.id] = len(office.queue)
        samples.append(row)

    holder["network"] = ClinicNetwork(NetworkConfig(seed=21, horizon=480.0), observer=sample)
    snapshot = holder["network"].run()

    frame = pd.DataFrame(samples)
    frame.to_csv(test_output_dir / "queue_lengths.csv", index=False)
    snapshot.offices_frame().to_csv(test_output_dir / "offices.csv")

    fig, (ax_queues, ax_util) = plt.subplots(nrows=2, ncols=1, figsize=(10, 7))
    for column in frame.columns.drop(["time", "kind"]):
        ax_queues.step(frame["time"], frame[column], where="post", label=column)
    ax_queues.set_xlabel("time (min)")
    ax_queues.set_ylabel("queue length")
    ax_queues.legend(loc="upper right")
    ax_queues.grid(True, alpha=0.3)

    offices = snapshot.offices_frame()
    ax_util.bar(offices["id"], offices["utilisation"])
    ax_util.set_ylabel("utilisation")
    ax_util.set_ylim(0, 1)

    fig.tight_layout()
    fig.savefig(test_output_dir / "queue_lengths.png", dpi=120)
    plt.close(fig)

    assert (test_output_dir / "queue_lengths.png").exists()
    assert 0 < len(frame) <= snapshot.events_dispatched
    assert frame["reception"].max() <= NetworkConfig().effective_reception_capacity
    assert snapshot.conservation_holds()
