# lithos

`lithos` models a Roblox deployment as a graph of resources (experiences,
places, place files, badges, passes, developer products, image and audio
assets, asset aliases, social links, notifications and more) and works out
what has to change between a previous deployment and the desired one.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `lithos.inputs`: `RobloxInputs` pairs an `InputKind` with its payload
  (`ExperienceInputs`, `FileInputs`, `ProductInputs`, `PassInputs`,
  `BadgeInputs`, …; configuration kinds carry a plain mapping, and
  `EXPERIENCE_THUMBNAIL_ORDER` carries nothing). `to_data()` and
  `RobloxInputs.from_data()` convert to and from a tagged form keyed by the
  camelCase kind name, e.g. `{"experience": {"groupId": None}}`.
- `lithos.outputs`: `RobloxOutputs` does the same for `OutputKind`.
  `all_outputs`, `single_output` (raises `LookupError` when missing) and
  `optional_output` pick payloads of one kind out of a list of outputs.
- `lithos.resource`: `RobloxResource` holds an id, inputs, optional outputs
  and the ids of its dependencies. `inputs_hash()` and `outputs_hash()` render
  them as block-style YAML through `yaml_hash`; these renderings are what is
  compared to detect changes. `existing()`, `add_dependency()`, `to_data()` and
  `from_data()` build and serialize resources.
- `lithos.graph`: `ResourceGraph` keeps its own copies of resources by id.
  `topological_order()` lists ids with dependencies first and raises
  `GraphCycleError` on a cycle or an unknown dependency;
  `get_resource_list()`, `get_outputs()` and `dependency_outputs()` read the
  graph; `diff(previous_graph)` returns a `ResourceGraphDiff`.
- `lithos.changes`: `ResourceGraphDiff` with its removals, additions, changes
  and dependency changes; `to_dict()` gives a plain form ordered by id.
- `lithos.evaluation`: `evaluate` and `evaluate_with_progress` delete
  resources that disappeared (leaves first), then create, update or leave
  unchanged each remaining resource in dependency order, calling a
  `ResourceManager` you supply. Resources whose price is above zero are
  skipped unless `allow_purchases` is true; resources whose dependencies have
  no outputs are skipped. An optional `EvaluateProgressHandler` is called
  after every mutation. The graph is updated in place with the new outputs;
  failures are collected and raised together as an `EvaluateError`.
  Progress is reported through the standard `logging` module at INFO level.
- `lithos.errors`: `OperationError` (with `Diagnostic` entries),
  `ResourceFailure`, `EvaluateResults` and `EvaluateError`.
- `lithos.project`: `get_current_branch` reads the checked-out git branch
  (raising `GitBranchError`), `match_branch` tests a branch against glob
  patterns, ignoring malformed ones, and `override_yaml` returns a mapping
  with overrides merged over it, skipping null values.
- `lithos.quota`: `format_quota_reset(reset, now=None)` renders the time left
  until a reset, such as `"1d 2h 3m 4s"`.

## Example

```python
import asyncio

from lithos.evaluation import evaluate
from lithos.graph import ResourceGraph
from lithos.inputs import ExperienceInputs, InputKind, RobloxInputs
from lithos.resource import RobloxResource

experience = RobloxResource(
    "experience_singleton",
    RobloxInputs(InputKind.EXPERIENCE, ExperienceInputs(group_id=None)),
)

previous = ResourceGraph([])
desired = ResourceGraph([experience])

print(desired.diff(previous).to_dict())

# results = asyncio.run(evaluate(desired, previous, my_manager, False))
```

## What this package does not do

- It has no `ResourceManager` that talks to Roblox; you supply one that
  performs the create, update, delete and pricing calls.
- It does not read project configuration files, select environments or store
  deployment state; `lithos.project` offers only the helpers listed above.
- It has no command-line tool.