import pytest


@pytest.fixture
def sample_sequences():
    """Fixture providing a small corpus with a two-way tie at k=4 (AATT vs ACGT)."""
    return ["AATT", "ACGT", "AATT", "ACGT", "GGCC"]


@pytest.fixture
def sample_corpus(tmp_path, sample_sequences):
    """Fixture writing sample_sequences to <tmp_path>/tie.txt."""
    file_path = tmp_path / "tie.txt"
    file_path.write_text("".join(f"{seq}\n" for seq in sample_sequences))
    return file_path
