# armstrong

A library for turning Azure REST API examples into Terraform configurations
that use the `azapi` provider, and for making sense of what happens when those
configurations are planned, applied and destroyed.

It needs nothing beyond the Python standard library and supports Python 3.10
and later.

## Modules

- `armstrong.azid` – work with ARM resource ids: `get_resource_type`,
  `get_parent_id_from_id`, `get_name`, `get_id_pattern` (raises `ValueError`
  for an id it cannot parse), `is_value_match_pattern` (case-insensitive),
  `get_id_from_response_example`, and `get_updated_body`, which copies an
  example body with values replaced or removed by their dotted path (a
  replacement keyed `key:<path>` renames a key).
- `armstrong.hclmarshal` – `marshal_indent(value, prefix, indent)` renders a
  JSON-like value as an HCL expression. Keys are sorted; keys holding `/` or
  starting with a digit are quoted; strings written as `${...}` (as values or
  keys) are emitted as raw expressions.
- `armstrong.hclconfig` – a light parser for the top-level blocks of a
  configuration (`parse_blocks`, `HclBlock` with `attribute`,
  `set_attribute` and `render`), plus `rename_label`, `combine`,
  `find_resource_address`, `load_existing_dependencies`,
  `get_azapi_resource_id_pattern`, `random_name` and the `PROVIDER_HCL` text.
  Parse errors raise `ValueError`. Output is not reformatted.
- `armstrong.reference` – `Reference`, `is_known` and
  `new_reference_from_address` (`type.label.prop` or `data.type.label.prop`;
  anything else gives `None`).
- `armstrong.singular` – `singularize(word)`, used to derive labels.
- `armstrong.base` – `PropertyDependencyMapping`, `get_key_value_mappings`,
  `required_dependencies`, `update_property_dependency_mappings_reference`,
  `find_parent_reference` and `new_label`.
- `armstrong.resource` / `armstrong.data_source` – `new_resource_from_example`
  and `new_data_source_from_example` read an API example file and return an
  `AzapiResource` or `DataSource` whose `hcl()` renders an `azapi_resource`
  block. `AzapiResource.hcl(True)` writes the body as a JSON heredoc,
  `hcl(False)` as `jsonencode(...)`.
- `armstrong.loader` – `MappingJsonDependencyLoader(path).load()` reads a JSON
  array of `{"resourceType", "idPattern", "exampleConfiguration"}` objects and
  returns `Dependency` records.
- `armstrong.types` – the dataclasses shared by the package (`Dependency`,
  `RequestTrace`, `Mapping`, `PassReport`, `ReportedResource`, `DiffReport`,
  `Diff`, `Change`, `ErrorReport`, `ReportError`).
- `armstrong.tracelog` – `parse_logs(path)` extracts ARM requests and
  responses from a Terraform debug log; `new_request_trace(raw)` parses one
  entry. The last entry of a log is not closed and is not returned.
- `armstrong.traces` – `request_traces_content`, `all_request_traces_content`,
  `cleanup_all_request_traces_content` collect the traces of one resource;
  `diff_error_codes` names the round-trip error codes a diff message shows.
- `armstrong.jsondiff` – `compare(a, b, options)` compares two JSON documents
  and returns a `Difference` and a marked-up rendering; `DiffOptions`, `Tag`
  and `default_console_options` control the markup.
- `armstrong.diffmessage` – `diff_message_terraform`, `diff_message_readable`,
  `diff_message_markdown` and `diff_message_description` describe a `Change`.
- `armstrong.tfreport` – reports built from plans and states given as the
  decoded JSON of `terraform show -json`: `get_changes` (returning `Action`
  values), `new_diff_report`, `new_pass_report`, `new_pass_report_from_state`,
  `new_id_address_from_state`, `get_body`, `expand_identity`, and
  `new_error_report` / `new_cleanup_error_report` built from apply or destroy
  error text.

## Examples

Resource ids:

```python
from armstrong.azid import get_id_pattern, get_parent_id_from_id, get_resource_type

resource_id = (
    "/subscriptions/00000000-0000-0000-0000-000000000000/resourceGroups/rg1"
    "/providers/Microsoft.MachineLearningServices/workspaces/ws1/computes/compute1"
)

get_resource_type(resource_id)
# 'Microsoft.MachineLearningServices/workspaces/computes'

get_parent_id_from_id(resource_id)
# '/subscriptions/00000000-0000-0000-0000-000000000000/resourceGroups/rg1'
# '/providers/Microsoft.MachineLearningServices/workspaces/ws1'

get_id_pattern(resource_id)
# '/subscriptions/resourceGroups/providers/Microsoft.MachineLearningServices/workspaces/computes'
```

A request body as HCL:

```python
from armstrong.hclmarshal import marshal_indent

print(marshal_indent({"location": "eastus", "tags": {"env": "test"}}, "", "  "))
# {
#   location = "eastus"
#   tags = {
#     env = "test"
#   }
# }
```

A resource block from an API example, wired to the resources already declared
in a working directory and to those a mapping file knows about:

```python
from armstrong.hclconfig import load_existing_dependencies
from armstrong.loader import MappingJsonDependencyLoader
from armstrong.resource import new_resource_from_example

resource = new_resource_from_example("examples/compute_create.json")
existing = load_existing_dependencies("work")
known = MappingJsonDependencyLoader("mappings.json").load()

needed = resource.required_dependencies(existing, known)
resource.update_property_dependency_mappings_reference(existing + needed, [])
print(resource.hcl(False))
```

Traces of one resource from a debug log:

```python
from armstrong.tracelog import parse_logs
from armstrong.traces import all_request_traces_content

logs = parse_logs("work/log.txt")
print(all_request_traces_content(resource_id, logs))
```

Describing a round-trip difference:

```python
from armstrong.diffmessage import diff_message_description
from armstrong.types import Change

change = Change(before='{"sku": "Basic"}', after='{"sku": "Standard"}')
print(diff_message_description(change))
# - .sku: expect Standard, but got Basic
```

## What it does not do

- There is no command-line tool; everything is used as a library.
- It does not find, install or run Terraform. Plans and states must be
  produced elsewhere and passed in as decoded JSON; apply errors are passed in
  as their text.
- It does not write the finished Markdown report documents; it gives the
  pieces (traces, diff messages, error codes, report records) that go into
  them.
- No mapping file ships with the package. `MappingJsonDependencyLoader()`
  without a path looks for `mappings.json` beside `armstrong/loader.py` and
  raises `OSError` when it is not there, so pass a path.

## Running the tests

Install the package with its `test` extra and run `pytest` from the project
root.