# vfox

Building blocks of an SDK version manager, as a Python library. The package
reads and writes the user's configuration file, keeps a small file-backed
cache, manages environment variables and `PATH` entries, checks download
checksums, describes the data that passes between the manager and its
plugins, converts Python values to and from Lua-style tables, and finds and
names release archives for a self-upgrade.

## Modules

| Module            | Purpose                                                                 |
|-------------------|-------------------------------------------------------------------------|
| `vfox.logger`     | Levelled console logging (`debug`, `info`, `error` and their `...f` forms) with `set_level` and `LoggerLevel`. |
| `vfox.checksum`   | `Checksum` holds a digest and its type (`sha256`, `sha512`, `sha1`, `md5`, `none`) and checks a file against it. |
| `vfox.cache`      | `FileCache`, a key/value cache with expiry that is saved to its file on `close()`; `new_value` and `unmarshal_value` encode values as JSON. |
| `vfox.config`     | The `config.yaml` model: `Proxy`, `Storage`, `Registry`, `LegacyVersionFile`, `Cache` and `CacheDuration`, with `new_config`, `new_config_with_path`, `default_config` and `parse_duration`. |
| `vfox.env`        | `Paths`, an ordered set of `PATH` entries, `Envs`, and `EnvManager`, which applies variables and paths to `os.environ`. |
| `vfox.hooks`      | Dataclasses for plugin hook data, such as `LuaCheckSum` and `LuaPluginInfo`. |
| `vfox.luai`       | `LuaTable`, `LuaFunction`, `marshal`, `unmarshal` and `luai_field` for converting Python values and dataclasses to and from Lua-style tables. |
| `vfox.configcmd`  | `config_list`, `config_get`, `config_set` and `default_value` for working with settings by dotted key. |
| `vfox.upgrade`    | `fetch_latest_version`, `parse_latest_version`, `construct_binary_name`, `generate_urls`, `download_file` and `request_permission`. |

## Configuration

```python
from vfox.config import new_config

config = new_config("/home/me/.version-fox")
print(config.proxy.enable, config.proxy.url)
print(config.cache.available_hook_duration.to_yaml())

config.legacy_version_file.enable = True
config.save("/home/me/.version-fox")
```

If the directory holds no `config.yaml`, one is written with the defaults
returned by `default_config()`. Sections or settings missing from an existing
file get their default values.

A `CacheDuration` is a number of nanoseconds. `-1` never expires and `0`
disables caching; other values are written as hours, minutes and seconds,
such as `12h` or `1h30m`. `parse_duration` reads text such as `1h30m` or
`1.5s`.

`Storage.validate()` checks that the configured SDK path is a writable
directory and raises `OSError` if it is not.

### Settings by dotted key

```python
from vfox.config import default_config
from vfox.configcmd import config_get, config_list, config_set, default_value

config = default_config()
config_set(config, ["proxy", "enable"], "true")
config_set(config, ["cache", "availableHookDuration"], "30m")
print(config_get(config, ["proxy", "enable"]))   # ['true']
print("\n".join(config_list(config)))
print(default_value(["registry", "address"]))    # ''
```

## Caching

```python
from vfox.cache import FileCache, new_value, unmarshal_value

with FileCache("flush_env.cache") as cache:
    cache.set("nodejs", new_value("20.11.0"), -1)   # -1: never expires
    cache.set("temp", new_value(1), 60)             # expires after 60 seconds
    print(unmarshal_value(cache.get("nodejs")))
# leaving the block writes the cache to disk
```

`get` returns `None` for keys that are missing or have expired.

## PATH handling

```python
from vfox.env import PathFrom, new_paths

paths = new_paths(PathFrom.EMPTY_PATHS)
paths.add("/opt/sdk/bin")
paths.add("/usr/bin")
paths.merge(new_paths(PathFrom.OS_PATHS))
print(paths.slice())
print(str(paths))           # entries joined with ':'
```

`Paths` keeps the order in which entries were first added and drops
duplicates. `to_bin_paths()` lists the executable files directly inside each
entry. `EnvManager` records variables and paths with `load` and `remove`, and
`flush()` writes them to `os.environ`, putting new `PATH` entries first.

## Checksums

```python
from vfox.hooks import LuaCheckSum

checksum = LuaCheckSum(sha256="9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08").checksum()
print(checksum.verify("download.tar.gz"))
```

When several digests are given, `sha256` is preferred, then `md5`, `sha1` and
`sha512`. With none at all the checksum type is `none`, and verification
prints a warning and succeeds.

## Lua-style tables

```python
from dataclasses import dataclass
from vfox.luai import luai_field, marshal, unmarshal

@dataclass
class Item:
    name: str = luai_field("name", default="")
    size: int = luai_field("size", default=0)

table = marshal(Item("node", 3))
print(table.get("name"), table.get("size"))   # node 3.0
print(unmarshal(table, Item))                 # Item(name='node', size=3)
```

Numbers become floats in tables, as in Lua. Unmarshalling into `Any` gives
plain dicts, lists, floats, strings and booleans.

## Upgrade lookups

```python
from vfox.upgrade import construct_binary_name, generate_urls

print(construct_binary_name("v0.5.0", "darwin", "arm64"))
# vfox_0.5.0_macos_aarch64.tar.gz
bin_url, diff_url = generate_urls("v0.4.0", "v0.5.0", "linux", "amd64")
```

## What this package does not do

- It has no command-line program; every part is used from Python.
- It does not run plugins. `vfox.luai` converts data to and from Lua-style
  tables but contains no Lua interpreter, and nothing here installs,
  lists or switches SDK versions.
- It does not write shell hook or activation scripts.
- `vfox.upgrade` finds, names and downloads release archives but does not
  unpack them or replace a running executable.
- `EnvManager` and `str(Paths)` join `PATH` entries with `:`, as on Linux and
  macOS; Windows environment handling is not provided.