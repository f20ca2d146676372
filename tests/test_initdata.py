from stepflow.initdata import PipelineStepInitData


def test_added_argument_can_be_read():
    data = PipelineStepInitData()
    data.add_named_argument("first argument", "first hello from step 2")
    assert data.get_named_argument("first argument") == "first hello from step 2"


def test_missing_argument_returns_none():
    data = PipelineStepInitData()
    data.add_named_argument("first argument", "x")
    assert data.get_named_argument("second argument") is None


def test_duplicate_name_keeps_first_value():
    data = PipelineStepInitData()
    data.add_named_argument("outputFileName", "one.txt")
    data.add_named_argument("outputFileName", "two.txt")
    assert data.get_named_argument("outputFileName") == "one.txt"


def test_arguments_are_independent():
    data = PipelineStepInitData()
    data.add_named_argument("a", "1")
    data.add_named_argument("b", "2")
    assert (data.get_named_argument("a"), data.get_named_argument("b")) == ("1", "2")