# clikit

Pieces for building command line applications in Python:

- `clikit.args`: `Args`, a read-only view of positional arguments.
- `clikit.category`: grouping commands and flags into named categories for help output.
- `clikit.genflags`: a model of a YAML flag-type specification (`Spec`, `FlagType`,
  `FlagTypeConfig`, `FlagStructField`) and the `type_name` naming rule.
- `clikit.altsrc`: alternate input sources for flag values, from plain mappings and from
  JSON, YAML and TOML files read locally or fetched over HTTP(S), and a way to apply
  them to flags.

Requires Python 3.11 or later. The only runtime dependency is PyYAML.

## Positional arguments

```python
from clikit.args import Args

args = Args(["deploy", "staging", "--force"])
args.first()    # "deploy"
args.get(1)     # "staging"
args.get(10)    # "", out of range gives an empty string
args.tail()     # ["staging", "--force"], a fresh list
args.slice()    # all three, a fresh list
args.present()  # True
len(args)       # 3
```

`Args` can be iterated, compared for equality and hashed.

## Categories

```python
from clikit.category import CommandCategories

categories = CommandCategories()
categories.add_command("build", build_command)
categories.add_command("build", clean_command)
categories.add_command("release", publish_command)

for category in categories.categories():
    print(category.name, [c.name for c in category.visible_commands()])
```

Categories keep the order in which they were first added. Commands whose `hidden`
attribute is true are left out of `visible_commands()`.

Flags are grouped with `FlagCategories.add_flag(category, flag)`, or all at once with
`flag_categories_from_flags(flags)`, which takes every flag that has a `get_category()`
method. `visible_categories()` returns the categories sorted by name; each
`VisibleFlagCategory.flags()` returns the flags whose `is_visible()` is true, sorted
by their string form.

## Flag-type specifications

```python
from pathlib import Path

from clikit.genflags import Spec, type_name

type_name("int", None)              # "IntFlag"
type_name("[]bool", None)           # "BoolSliceFlag"
type_name("time.Rumination", None)  # "RuminationFlag"

spec = Spec.from_yaml(Path("flag-spec.yaml").read_text())
for flag_type in spec.sorted_flag_types():
    print(flag_type.type_name(), flag_type.value_pointer())
```

A `FlagTypeConfig` with a non-blank `type_name` overrides the derived name.
`FlagType.generate_flag_interface()` and its siblings return false only when the
interface is listed in the config's `skip_interfaces` (compared case-insensitively).
`Spec.from_yaml` raises `ValueError` when the document or `flag_types` is not a mapping.

## Alternate input sources

Flag values can come from configuration data when they were not given on the command
line or through an environment variable. Dotted names such as `top.test` reach into
nested tables.

```python
from clikit.altsrc.source import MapInputSource

source = MapInputSource("settings", {"top": {"port": 8080}, "timeout": "1m"})
source.get_int("top.port")      # 8080
source.is_set("top.port")       # True
source.get_duration("timeout")  # datetime.timedelta(seconds=60)
source.get_string("missing")    # "", absent names give the zero value
```

A value of the wrong type raises `IncorrectTypeError`. Durations may be stored as
`timedelta` or as strings like `"1h30m"`, `"-1.5s"` or `"300ms"`, which
`parse_duration` reads. `default_input_source()` returns an empty source.

File-backed sources:

```python
from clikit.altsrc.file_sources import toml_source_from_file, yaml_source_from_file
from clikit.altsrc.json_source import json_source, json_source_from_file

config = yaml_source_from_file("config.yaml")
settings = toml_source_from_file("settings.toml")
data = json_source('{"top": {"test": 15}}')
data.get_int("top.test")  # 15
```

Paths may also be `http://` or `https://` URLs; `load_data_from` in
`clikit.altsrc.fetch` raises `LoadError` when a file does not exist, a URL scheme is
not supported or a host cannot be reached. The YAML and TOML loaders wrap read and
parse failures in `LoadError` too. A `JSONSource` raises `KeyError` for a missing name
instead of returning a zero value.

## Applying a source to flags

```python
from clikit.altsrc.apply import InputSourceExtension, init_input_source_with_context
from clikit.altsrc.file_sources import yaml_source_from_flag_func

parsed = {"port": 80}
port = InputSourceExtension(name="port", kind="int", env_vars=["PORT"], flag_set=parsed)
before = init_input_source_with_context([port], yaml_source_from_flag_func("load"))
before(ctx)  # ctx provides is_set(name) and string(name)
```

`kind` is one of `generic`, `string`, `path`, `bool`, `int`, `float64`, `duration`,
`string_slice` or `int_slice`. A flag already set in the context, or one of whose
environment variables is defined, keeps its value; otherwise the source's value
replaces the entries for the flag's name and aliases in `flag_set`. Relative `path`
values are resolved against the directory of the source file. Slice flags also copy
the value into `destination` when one is given. Errors raised while creating the source
come back as `RuntimeError`.

## What this package does not do

There is no application runner: `clikit` does not parse command lines, dispatch
commands, render help or version output, or provide a flag parser or a context object.
The context passed to the hooks must be supplied by the caller. `clikit.genflags` only
models and reads the flag-type specification; it does not generate or write any code.