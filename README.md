# dedupgo

dedupgo finds files with identical content. It walks one or more directory trees and hashes every regular file with MD5 or SHA-256. Files with the same digest are grouped together. In each group the first file found is treated as the original, and the rest are duplicates.

The command's messages are in Chinese.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
dedupgo [options] DIR [DIR ...]
```

Each option can be written with one dash or with two. For example, `-hash` and `--hash` are the same option.

- `--config PATH`: the YAML configuration file to use. The default is `~/.config/dedupgo/config.yaml`. A missing file means the built-in defaults are used.
- `--hash ALGO`: the hash algorithm. Use `sha256` for SHA-256. MD5 is the default, and any other value also gives MD5.
- `--min-size SIZE`: stored in the configuration, but the scan itself does not filter by size.
- `--force`: changes the labels on duplicates in text output from `[待删除]` (to be deleted) to `[已删除]` (deleted). Without it, a note saying the run is a preview is printed at the end.
- `--output txt|json`: the output format. The default is `txt`.
- `--trash` / `--no-trash`: recorded in the configuration. It does not affect the run.

Options given on the command line override the values in the configuration file. The exit status is 0 on success and 1 in any of these cases:

- the configuration cannot be loaded;
- no directory was given;
- a directory tree cannot be walked.

Examples:

```
dedupgo --hash sha256 ~/Pictures ~/Backup/Pictures
dedupgo --output json ~/Downloads > duplicates.json
```

### Text output

Text output gives:

- the total number of files hashed;
- the total size of those files;
- the space that removing the duplicates would free;
- every group of duplicates, listed by its digest. The first file is marked `[保留]` (kept).

### JSON output

JSON output is one object:

```json
{
  "DuplicateGroups": {
    "<digest>": ["/path/kept", "/path/duplicate"]
  },
  "TotalFiles": 2,
  "TotalSize": 2048,
  "SavedSize": 1024
}
```

Groups are sorted by digest.

## Configuration file

```yaml
hash_algorithm: md5
min_size: "0"
exclude_patterns:
  - "*.tmp"
  - "*.temp"
  - node_modules
  - .git
include_types: []
dry_run: true
output_format: txt
use_trash: true
```

These are the defaults.

- Unknown keys are ignored.
- A value of the wrong type is an error.
- `exclude_patterns` are shell-style patterns. They are matched against each file's base name, and a file that matches is skipped.
- `include_types` and `min_size` are read and saved, but they do not filter the scan.

## What scanning does

`dedupgo.scanner.Scanner` walks each root in lexical order.

- It does not follow symbolic links.
- Only regular files are hashed.
- Files that cannot be read are left out of the result.
- An error while listing a directory raises `OSError`.
- Hashing runs on a thread pool. The pool size is set by `Scanner.concurrency` and defaults to 5.

## Library use

```python
from dedupgo.scanner import Scanner, move_to_trash
from dedupgo.report import (
    format_scan_report,
    deletion_plan,
    format_delete_confirmation,
    delete_duplicates,
    format_delete_summary,
)

scanner = Scanner(hash_algorithm="sha256", exclude_patterns=["*.tmp"])
result = scanner.scan("/data/photos", "/backup/photos")
print(format_scan_report(result))

files, size = deletion_plan(result)
print(format_delete_confirmation(len(files), size))
deleted, failed = delete_duplicates(result, move_to_trash)
print(format_delete_summary(deleted, failed))
```

### The scan result

`Scanner.scan` returns a `ScanResult` with these fields:

- `duplicate_groups`: a dict that maps a digest to a list of paths;
- `total_files`;
- `total_size`;
- `saved_size`.

`ScanResult.to_dict()` gives the form used for the JSON output. `Scanner.calculate_file_hash(path)` hashes a single file.

### Removing duplicates

`delete_duplicates(result, remover)` calls `remover` on every file except the first in each group. It returns the count of files removed and the count of failures. With no `remover`, it uses `dedupgo.scanner.move_to_trash`.

`dedupgo.scanner.move_to_trash` hands the file to the system's own tool:

- on macOS, `osascript` and Finder;
- on Windows, PowerShell;
- on Linux, `gio trash`.

On any other platform it raises `OSError`.

### File utilities

`dedupgo.fileutil` has a second `move_to_trash`:

- On macOS and Windows it uses the same system tools.
- Elsewhere it renames the file into `~/.local/share/Trash/files`. If that name is already taken, it adds a `_N` suffix.

`fileutil` also has:

- `get_file_type(path)`, which classifies a file by its first bytes. It returns one of `image`, `video`, `audio`, `text`, `pdf`, `archive` or `other`, and raises `EOFError` for an empty file.
- `detect_content_type(data)`, which returns a MIME type guessed from the first 512 bytes.
- `format_file_size` and `parse_file_size`.

### Sizes

- `dedupgo.sizes.parse_size("1.5GB")` turns a size string into bytes. Units B, KB, MB, GB and TB are powers of 1024. An invalid value raises `ValueError`.
- `dedupgo.sizes.format_size(2048)` returns `"2.0 KB"`.

### Configuration

`dedupgo.config` provides:

- `Config`;
- `default_config()`;
- `default_config_path()`;
- `load_config(path)`;
- `save_config(config, path)`.

## What it does not do

- The `dedupgo` command only reports duplicates. It never deletes or moves files, even with `--force`. To remove duplicates, call `dedupgo.report.delete_duplicates` from Python.
- There is no graphical window. `dedupgo.report` provides the report text, the deletion plan and the confirmation and summary messages that an interactive front end would show, but no such front end is included.
- Scans are not filtered by minimum size or by file type.