"""Well-known payload names, mime types and matching-pattern keys."""

PAYLOAD_NAME_MQTT_RECEIVED_DATA = "MQTT received data"
PAYLOAD_NAME_FILE_RECEIVED_DATA = "File received data"
PAYLOAD_NAME_HTTP_RECEIVED_DATA = "HTTP received data"
PAYLOAD_NAME_FILE_SEND_DATA = "FILE_SEND_TEXT_DATA"
PAYLOAD_NAME_PROCESSING_ERROR = "___processingError___"

MIMETYPE_APPLICATION_OCTET_STREAM = "application/octet-stream"
MIMETYPE_TEXT_PLAIN = "text/plain"
MIMETYPE_TEXT_PLAIN_UTF8 = "text/plain; charset=utf-8"

PATTERN_HTTP_URL_PARAMS_PREFIX = "http.rcv.urlParameter."
PATTERN_HTTP_HEADER_FIELD_PREFIX = "http.rcv.headerField."
PATTERN_PROCESSED_BY_PREFIX = "pipeline.processedBy."

PATTERN_TRANSACTION_ID = "transactionId"
PATTERN_DATE_CREATED = "dateCreated"
PATTERN_TIME_CREATED = "timeCreated"
PATTERN_DATA_ORIGIN = "dataOrigin"
PATTERN_RECEIVED_BY_LISTENER = "receivedByListener"
PATTERN_RECEIVED_VIA_PROTOCOL = "receivedViaProtocol"
PATTERN_RECEIVED_FROM_HOST = "receivedFomHost"
PATTERN_OUTPUT_FILE_NAME = "outputFileName"
PATTERN_INPUT_FILE_NAME = "inputFileName"
PATTERN_HTTP_METHOD = PATTERN_HTTP_HEADER_FIELD_PREFIX + "method"
PATTERN_HTTP_PATH = PATTERN_HTTP_HEADER_FIELD_PREFIX + "path"
PATTERN_LAST_PIPELINE = "pipeline.lastProcessedPipelineName"

PATTERN_VALUE_MQTT_LISTENER = "MqttListener"
PATTERN_VALUE_FILE_LISTENER = "FileListener"
PATTERN_VALUE_HTTP_LISTENER = "HttpListener"
PATTERN_VALUE_PROTOCOL_MQTT = "mqtt"
PATTERN_VALUE_PROTOCOL_FILE = "file"
PATTERN_VALUE_PROTOCOL_HTTP = "http"