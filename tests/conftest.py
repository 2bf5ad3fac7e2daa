import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from lrdemo import make_example_data


@pytest.fixture
def il6_sender() -> pd.DataFrame:
    return pd.DataFrame(
        {"Microglia": [3.5], "Astrocyte": [0.2]}, index=["Il6"]
    )


@pytest.fixture
def il6_receiver() -> pd.DataFrame:
    return pd.DataFrame(
        {"Endothelial": [2.8], "Neuron": [0.1]}, index=["Il6ra"]
    )


@pytest.fixture
def il6_catalog() -> pd.DataFrame:
    return pd.DataFrame({"ligand": ["Il6"], "receptor": ["Il6ra"]})


@pytest.fixture
def example_data():
    return make_example_data(seed=1)
