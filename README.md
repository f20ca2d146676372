# stepflow

stepflow runs data through configurable pipelines. A pipeline is an
ordered list of steps; each step is backed by a worker module that
receives a `PipelineProcessingData` container and may read its payloads
and add payloads, matching patterns or errors.

The package needs nothing beyond the standard library. It reports what
it does through the standard `logging` module.

## Install

```
pip install stepflow
```

## Modules

- `stepflow.names`: well-known payload names, mime types and
  matching-pattern keys, such as `PAYLOAD_NAME_PROCESSING_ERROR`,
  `MIMETYPE_TEXT_PLAIN`, `PATTERN_TRANSACTION_ID` and
  `PATTERN_LAST_PIPELINE`.
- `stepflow.payload`: `Matchable` (a set of key/value matching
  patterns), `BinaryProcessingData` (base class for structured payloads),
  `ProcessingError` and `ProcessingPayload`.
- `stepflow.initdata`: `PipelineStepInitData`, the named arguments a
  step's worker receives when it is initialised. A name may be added
  several times; `get_named_argument` returns the first value, or `None`.
- `stepflow.processingdata`: `PipelineProcessingData`, the container
  that carries payloads, errors and matching patterns through pipelines.
- `stepflow.workers`: `WorkerModule`, the bundled workers and the
  worker registry (`register_worker`, `create_worker`).
- `stepflow.fifo`: `PipelineFifo`, a thread-safe queue of processing data.
- `stepflow.pipeline`: `Pipeline`, `PipelineStep` and `PipelineError`.
- `stepflow.processor`: `PipelineProcessor`, which runs several
  pipelines and can poll a `PipelineFifo` in a background thread.
- `stepflow.car`: `BusinessObject` and `Car`, the business objects of a
  drivers' log sample.

## Processing data

Every new `PipelineProcessingData` gets the matching patterns
`transactionId` (creation time stamp plus a running nine-digit counter),
`dateCreated`, `timeCreated` and `pipeline.lastProcessedPipelineName`
(empty at first).

```python
from stepflow.processingdata import PipelineProcessingData

data = PipelineProcessingData()
data.add_payload_data("question", "text/plain", "What is the answer?")
data.get_payload("question").as_string()   # 'What is the answer?'
data.get_payload("question").as_base64()   # the text, base64 encoded
data.add_error("E1", "something went wrong")
data.has_error()                           # True
data.get_all_errors()                      # [ProcessingError('E1', 'something went wrong')]
data.to_json()                             # dict with processingCounter, processingPayloads,
                                           # parameters and processingErrors
```

A payload holds either a `str` or a `BinaryProcessingData` instance;
anything else raises `TypeError`. When a payload is added, it receives a
copy of the data's matching patterns at that moment. `get_payload`
returns the most recently added payload of that name.

## Worker modules

A worker subclasses `WorkerModule` and overrides any of `init(init_data)`,
`process(processing_data)` and `finish()`. Workers are looked up by
library name:

```python
from stepflow.workers import WorkerModule, register_worker

class Shout(WorkerModule):
    def process(self, processing_data):
        processing_data.add_matching_pattern("shouted", "true")

register_worker("shout", Shout)
```

`create_worker(name)` builds a new worker and raises `KeyError` for an
unknown name. Three workers are registered from the start:

- `helloWorld` (`HelloWorld`): prints `Hello World`, adds the text
  payload `data to be sent back to the http client` with the value
  `hello world`, and sets the pattern `processed_by_hello_world` to
  `true`. If the pattern `http.rcv.urlParameter.what` is `throwError`,
  it adds the error `-42`.
- `argumentsProcessor` (`ArgumentsProcessor`): reads the named arguments
  `outputFileName`, `first argument`, `second argument`, `raise Error 01`
  and `raise Error 02`. When processing, it writes the first and second
  argument as two lines to `outputFileName` (if set), adds the payload
  `answer` with `the answer is 42` when a payload `question` holds
  `What is the answer?`, and adds the errors `first error` and
  `second error` for the configured error messages.
- `binaryDataProcessor` (`BinaryDataProcessor`): adds the payload
  `myBinaryPayloadData` holding a `ProcessingError` whose message names
  its first and second argument.

## Pipelines

A pipeline is loaded from a JSON file:

```json
{
  "pipelineName": "my first pipeline",
  "pipelineSteps": [
    {"stepName": "greet", "libraryName": "helloWorld"},
    {
      "stepName": "arguments",
      "libraryName": "argumentsProcessor",
      "namedArguments": {"first argument": "hello"}
    }
  ]
}
```

`Pipeline.from_config_file(path)` returns the pipeline, or `None` with
the error logged if the file cannot be read or parsed, `pipelineName` or
the `pipelineSteps` array is missing, or a step cannot be set up (no
`stepName`, no `libraryName`, or no worker registered under that name).
`load_config(path)` does the same work on an existing pipeline but
raises `OSError`, `ValueError` or `PipelineError` instead.

`execute(data)` runs every step on the data and returns it; called
without data, it creates a new `PipelineProcessingData`. The data is
processed only when neither side has matching patterns, or when every
pattern of the pipeline is found with the same value on the data;
otherwise the pipeline leaves it unchanged. Patterns are set on a
pipeline with `add_matching_pattern`. On processing, the data's
processing counter is increased, its last processed pipeline name is set,
and before each step a pattern
`pipeline.processedBy.<counter>.<pipeline>.<step number>.<step>` is set
to `true` (counter and step number zero-padded to five digits, spaces in
names replaced by underscores).

```python
from stepflow.pipeline import Pipeline
from stepflow.processingdata import PipelineProcessingData

with Pipeline.from_config_file("pipelines/first.json") as pipeline:
    data = PipelineProcessingData()
    data.add_payload_data("question", "text/plain", "What is the answer?")
    pipeline.execute(data)
    print(pipeline.step_count(), pipeline.get_step_by_name("greet").step_name)
```

`close()` calls `finish()` on every worker and releases it; a pipeline
is also a context manager that closes itself.

## Processors and the fifo

A process file lists pipeline files and optional matching patterns for
each:

```json
{
  "processName": "main",
  "pipelines": [
    {
      "pipelineConfigFile": "first.json",
      "matchingPatterns": [{"source": "demo"}]
    }
  ]
}
```

`PipelineProcessor.from_config_file(path, pipelines_dir)` looks up the
pipeline files in `pipelines_dir`, or, when it is `None`, in the
directory of the process file. It returns `None` with the error logged
if the file or any pipeline fails to load; `load_config` raises instead.
`execute(data)` offers the data to every pipeline in order.

```python
from stepflow.fifo import PipelineFifo
from stepflow.processor import PipelineProcessor

processor = PipelineProcessor.from_config_file("processes/main.json", "pipelines")
fifo = PipelineFifo()
processor.start_processing_loop(fifo)
fifo.enqueue_payload("incoming", "text/plain", "hello", {"source": "demo"})
processor.stop_processing_loop()
processor.close()
```

The loop runs in a daemon thread. It waits up to half a second between
polls of an empty queue and polls again at once after it found data.
Starting a second loop on the same processor raises `RuntimeError`.
`PipelineFifo.enqueue(data, patterns)` queues existing data,
`dequeue()` returns the oldest element or `None`, and `len(fifo)` gives
the number of queued elements.

## Business objects

`Car(model, license_plate)` is a `BusinessObject`, and so a
`BinaryProcessingData` that can be carried as a payload.
`Car.write_to_database(db)` takes any object with an `is_open()` method;
it never writes and always returns `False`.

## What the package does not do

- It has no listeners: nothing receives data from files, MQTT or HTTP
  and puts it into a `PipelineFifo`. Data must be queued or passed to
  `execute` by the calling code.
- It has no application-wide configuration: logging is configured through
  the standard `logging` module, and the directory of pipeline files is
  passed to `PipelineProcessor` explicitly.
- It has no database layer, and business objects are not stored anywhere.
- Workers are Python classes registered by name; nothing is loaded from
  files at run time.
- It provides no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```