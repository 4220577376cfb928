# tics

`tics` is a small, file-based version control tool for engineering work:
CAD models (STL files), sensor logs and plain text files. A repository is a
directory containing a `.tics` folder that holds staged files, commits per
branch, tags, stashes and a per-file history.

## Installation

```
pip install .
```

This installs the `tics` command.

## Getting started

```
tics init myproject
cd myproject
tics add notes.txt
tics commit -m "First notes"
tics log
tics status
```

## Commands

| Command | Purpose |
| --- | --- |
| `tics init <repo_name>` | Create a repository directory with an empty `.tics` store on branch `main` |
| `tics add <filename>` | Stage a file |
| `tics commit -m <message>` | Commit everything staged to the current branch and empty the stage |
| `tics status` | Show staged files, files committed on the current branch, and the branch |
| `tics log` | Show the repository log (commits and merges) |
| `tics history <filename>` | Show the commits that included one file |
| `tics diff <filename>` | Compare a working file line by line with its staged copy |
| `tics restore <filename>` | Restore a file from the latest commit on the current branch |
| `tics branch <name>` | Create a branch |
| `tics list-branches` | List branches |
| `tics checkout <name>` | Switch to an existing branch |
| `tics merge <branch_name>` | Merge the latest STL commit of a branch into the current branch |
| `tics stash` | Move staged files into a new stash |
| `tics pop` | Restore the most recent stash into the stage and delete it |
| `tics list` | Show the stash log |
| `tics tag <tag_name>` | Create a tag |
| `tics list-tags` | List tags |
| `tics add-cad <filename>` | Stage an STL file together with size and vertex-count metadata |
| `tics diff-cad <filename>` | Show the staged metadata of an STL file |
| `tics iot` | Record a simulated sensor reading in a new commit directory |
| `tics cad` | Record a simulated CAD drawing event in a new commit directory |

All commands other than `init` work on the `.tics` directory in the current
working directory. `commit` must be given exactly `-m <message>`; any other
form is reported as an unknown command.

Running `tics` with no command, with an unknown command, or with the wrong
number of arguments prints a usage line and exits with status 1. When a
command runs but fails (a missing file, an unknown branch, a merge conflict)
the reason is printed and the exit status is 0.

## CAD files and merging

`tics add-cad part.stl` stages the model and writes `part.stl.meta` next to
it, recording the file size and the number of vertices: counted from
`vertex` lines in an ASCII STL (one starting with `solid `), or three per
triangle from the count at byte offset 84 of a binary STL. A file with no
vertices found is recorded with `vertices:0`.

`tics merge <branch_name>` builds a new commit on the current branch from
the latest commit of both branches, taking only `.stl` files and their
`.meta` companions. A merge is refused when the branch is the current one,
does not exist, or has no commits. An STL file whose metadata differs
between the two branches, or which exists only on the current branch, is a
conflict; every conflict is listed, the merge is aborted and no new commit
is left behind. STL files on the other branch without a `.meta` file are
skipped with a warning through the `logging` module.

## Using it from Python

Each command is also a function that takes an optional `root` directory
(default `"."`) and returns its result instead of printing it:

- `tics.repo_ops`: `init_repo`, `get_current_branch`, and `status`, which
  returns a `RepoStatus` with `branch`, `staged`, `committed` and `render()`.
- `tics.commit_ops`: `add_file`, `commit`, `copy_staged_files`, `show_log`,
  `show_file_history`, `restore_file`, and `diff_file`, which returns a list
  of `LineDiff(line, working, staged)`.
- `tics.branch_ops`: `create_branch`, `list_branches`, `checkout_branch`,
  `get_latest_commit` and `merge_branch`.
- `tics.stash_ops`: `stash_push`, `stash_pop`, `stash_list`.
- `tics.tag_ops`: `create_tag`, `list_tags`.
- `tics.cad_ops`: `add_cad`, `diff_cad`, `parse_stl_vertices`,
  `simulate_iot`, `simulate_cad`.
- `tics.file_ops`: `create_dir`, `copy_file`, `is_meta_file`.

Failures are raised as `tics.file_ops.TicsError`, whose message is the line
the command prints. Merge conflicts raise `tics.branch_ops.MergeConflictError`,
a `TicsError` whose `conflicts` attribute lists one line per conflicting file.

## What it does not do

- There are no remotes: no cloning, pushing or pulling.
- Commits are whole-directory snapshots named by timestamp; there are no
  commit hashes and no parent links between commits.
- Tags and branches do not point at a particular commit; a tag records only
  its creation time.
- `diff` compares a working file with its staged copy only, stopping at the
  end of the shorter file; it does not compare commits.
- `merge` handles STL files and their metadata only; other committed files
  are not carried into the merge commit.