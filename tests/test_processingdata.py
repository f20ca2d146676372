import re

from stepflow import names
from stepflow.payload import ProcessingError
from stepflow.processingdata import PipelineProcessingData


def test_default_patterns_are_set():
    data = PipelineProcessingData()
    tid = data.get_matching_pattern(names.PATTERN_TRANSACTION_ID)
    assert re.fullmatch(r"\d{14}_\d{9}", tid)
    date = data.get_matching_pattern(names.PATTERN_DATE_CREATED)
    tm = data.get_matching_pattern(names.PATTERN_TIME_CREATED)
    assert re.fullmatch(r"\d{8}", date)
    assert re.fullmatch(r"\d{6}", tm)
    assert tid.startswith(date)
    assert data.last_processed_pipeline_name() == ""


def test_transaction_ids_are_unique():
    a = PipelineProcessingData()
    b = PipelineProcessingData()
    assert a.get_matching_pattern(names.PATTERN_TRANSACTION_ID) != b.get_matching_pattern(
        names.PATTERN_TRANSACTION_ID
    )
    assert a.get_matching_pattern(names.PATTERN_TRANSACTION_ID)[15:] < b.get_matching_pattern(
        names.PATTERN_TRANSACTION_ID
    )[15:]


def test_payloads_can_be_added_and_found():
    data = PipelineProcessingData()
    data.add_payload_data("question", "text/plain", "What is the answer?")
    data.add_payload_data("answer", "text/plain", "the answer is 42")
    assert data.count_payloads() == 2
    assert data.get_payload("answer").as_string() == "the answer is 42"
    assert data.get_payload("missing") is None
    assert data.get_last_payload().payload_name == "answer"
    assert [p.payload_name for p in data.payloads()] == ["question", "answer"]


def test_get_payload_returns_latest_of_same_name():
    data = PipelineProcessingData()
    data.add_payload_data("x", "text/plain", "first")
    data.add_payload_data("x", "text/plain", "second")
    assert data.get_payload("x").as_string() == "second"


def test_last_payload_is_none_when_empty():
    data = PipelineProcessingData()
    assert data.get_last_payload() is None
    assert data.count_payloads() == 0


def test_payload_receives_copy_of_patterns():
    data = PipelineProcessingData()
    data.add_matching_pattern("key01", "value01")
    data.add_payload_data("question", "text/plain", "q")
    payload = data.get_payload("question")
    assert payload.get_matching_pattern("key01") == "value01"
    data.add_matching_pattern("key02", "value02")
    assert payload.get_matching_pattern("key02") is None


def test_binary_payload():
    data = PipelineProcessingData()
    err = ProcessingError("ProcessingError", "message")
    data.add_payload_data("myBinaryPayloadData", "", err)
    assert data.get_payload("myBinaryPayloadData").as_binary() is err
    assert not data.has_error()


def test_errors_are_collected_in_order():
    data = PipelineProcessingData()
    assert not data.has_error()
    data.add_error("first error", "this is a test error")
    data.add_error("second error", "this is yet another test error")
    assert data.has_error()
    errors = data.get_all_errors()
    assert [(e.error_code, e.error_message) for e in errors] == [
        ("first error", "this is a test error"),
        ("second error", "this is yet another test error"),
    ]
    assert data.count_payloads() == 0


def test_processing_counter():
    data = PipelineProcessingData()
    assert data.formatted_processing_counter() == "00000"
    data.increase_processing_counter()
    assert data.processing_counter == 1
    assert data.formatted_processing_counter() == "00001"


def test_last_processed_pipeline_name():
    data = PipelineProcessingData()
    data.set_last_processed_pipeline_name("my first testPipeline")
    assert data.last_processed_pipeline_name() == "my first testPipeline"
    assert data.get_matching_pattern(names.PATTERN_LAST_PIPELINE) == "my first testPipeline"


def test_to_json():
    data = PipelineProcessingData()
    data.increase_processing_counter()
    data.add_payload_data("answer", "text/plain", "the answer is 42")
    data.add_error("-42", "this error has been thrown on purpose")
    result = data.to_json()
    assert result["processingCounter"] == 1
    assert [p["payloadName"] for p in result["processingPayloads"]] == ["answer"]
    assert result["parameters"] == data.matching_patterns()
    assert result["processingErrors"] == [
        {"errorMessage": "this error has been thrown on purpose", "errorCode": "-42"}
    ]