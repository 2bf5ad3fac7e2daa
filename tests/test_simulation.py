import pandas as pd

from lrdemo import make_example_data
from lrdemo.simulation import LR_PAIRS, RECEIVER_CELLS, SENDER_CELLS


def test_example_data_shapes():
    data = make_example_data(seed=1)
    assert list(data.lr_network.columns) == ["ligand", "receptor"]
    assert len(data.lr_network) == len(LR_PAIRS)
    assert list(data.expr_sender.columns) == SENDER_CELLS
    assert list(data.expr_receiver.columns) == RECEIVER_CELLS
    # 12 LR genes + 5 background genes
    assert data.expr_sender.shape[0] == 17
    assert data.expr_sender.index.equals(data.expr_receiver.index)
    assert data.expr_sender.index.is_unique


def test_example_data_is_reproducible():
    a = make_example_data(seed=7)
    b = make_example_data(seed=7)
    pd.testing.assert_frame_equal(a.expr_sender, b.expr_sender)
    pd.testing.assert_frame_equal(a.expr_receiver, b.expr_receiver)

    c = make_example_data(seed=8)
    assert not a.expr_sender.equals(c.expr_sender)


def test_example_data_signals_and_range():
    data = make_example_data(seed=1)
    assert (data.expr_sender.to_numpy() >= 0).all()
    assert (data.expr_receiver.to_numpy() >= 0).all()
    assert data.expr_sender.loc["Il6", "Microglia"] >= 2.5
    assert data.expr_sender.loc["Tgfb1", "Astrocyte"] >= 2.0
    assert data.expr_receiver.loc["Il6ra", "Endothelial"] >= 2.2
    assert data.expr_receiver.loc["Cd44", "OPC"] >= 2.0
