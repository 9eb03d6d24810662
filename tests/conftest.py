import logging
from unittest.mock import MagicMock

import pytest
from pyspark.sql import DataFrame, SparkSession

# Names of fixtures that require Spark to be available
_SPARK_FIXTURE_NAMES = frozenset({"spark_fixture", "species_tables"})


def quiet_py4j() -> None:
    """Turn down Spark logging during the test context."""
    logging.getLogger("py4j").setLevel(logging.WARN)


def make_table(*columns: str) -> MagicMock:
    """A DataFrame stand-in that passes isinstance checks and exposes `columns`."""
    table = MagicMock(spec=DataFrame)
    table.columns = list(columns)
    return table


@pytest.fixture
def table_factory():
    return make_table


@pytest.fixture(scope="session")
def spark_fixture():
    quiet_py4j()

    spark = (
        SparkSession.Builder()
        .appName("polyframe tests")
        # Tiny frames: one core and one shuffle partition avoid scheduling overhead.
        .master("local[1]")
        .config("spark.sql.shuffle.partitions", "1")
        .config("spark.default.parallelism", "1")
        .config("spark.network.timeout", "10000")
        .config("spark.executor.heartbeatInterval", "1000")
        .config("spark.driver.memory", "1g")
        .config("spark.ui.enabled", "false")
        .config("spark.ui.showConsoleProgress", "false")
        .config("spark.sql.ui.retainedExecutions", "1")
        .config("spark.dynamicAllocation.enabled", "false")
        .getOrCreate()
    )

    yield spark

    spark.stop()


@pytest.fixture
def species_tables(spark_fixture):
    """Sightings (fact) plus two lookups; the family lookup is missing one species."""
    sightings = spark_fixture.createDataFrame(
        [(1, "robin"), (2, "wren"), (3, "blackbird")],
        "id INT, common_name STRING",
    )
    species = spark_fixture.createDataFrame(
        [
            ("robin", "Erithacus rubecula"),
            ("wren", "Troglodytes troglodytes"),
            ("blackbird", "Turdus merula"),
        ],
        "common_name STRING, species STRING",
    )
    families = spark_fixture.createDataFrame(
        [("Erithacus rubecula", "Muscicapidae"), ("Turdus merula", "Turdidae")],
        "species STRING, family STRING",
    )
    return sightings, species, families


def _mark_tests_using_spark_fixture(tests: list[pytest.Item]) -> None:
    """
    Adds the `requires_spark` marker to tests that use a fixture needing a
    Spark instance.

    :param tests: list of tests collected by `pytest`
    """
    for test in tests:
        if _SPARK_FIXTURE_NAMES.intersection(getattr(test, "fixturenames", ())):
            test.add_marker(pytest.mark.requires_spark)


def _skip_spark_tests(test: pytest.Item) -> None:
    """
    Tell `pytest` to skip tests that require a SparkSession.

    :param test: test collected by `pytest`
    """
    if list(test.iter_markers(name="requires_spark")):
        pytest.skip("Skipped tests that require a SparkSession")


def pytest_addoption(parser: pytest.Parser):
    parser.addoption(
        "--include-spark-tests",
        action="store_true",
        default=False,
        help="Run tests that start a local SparkSession.",
    )


def pytest_configure(config: pytest.Config):
    config.addinivalue_line("markers", "requires_spark: test needs a local SparkSession")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]):
    if not config.getoption("--include-spark-tests"):
        _mark_tests_using_spark_fixture(tests=items)


def pytest_runtest_setup(item: pytest.Item):
    if not item.config.getoption("--include-spark-tests"):
        _skip_spark_tests(test=item)
