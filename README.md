# pagevict

Page eviction policies for buffer pools and caches. The package answers one question: which
frame should be evicted next?

Two policies are provided:

- `LruReplacer` (in `pagevict.lru`): classic least-recently-used. Frames are ordered by their
  last access, and the oldest is evicted first.
- `LruKReplacer` (in `pagevict.lru_k`): LRU-K. Frames are ranked by their backward K-distance.
  Frames with fewer than K recorded accesses are evicted first, the one whose latest recorded
  access is oldest going first. An optional correlated reference period does two things.
  Accesses that fall within it of the previous access count as a single access. A frame that
  was touched within it is never chosen for eviction.

Both policies are safe to share between threads. Neither has any dependencies outside the
standard library.

## Installation

```
pip install pagevict
```

## Concepts

A *frame* is a slot in a fixed-size pool that holds a page of data. Frames are identified by
any hashable value, usually an integer index. Both policies implement the abstract base class
`pagevict.policy.EvictionPolicy`:

- `touch(frame_id)` records an access. The first touch also registers the frame.
- `touch_with(frame_id, access_type)` records an access together with its kind, given as an
  instance of `pagevict.policy.AccessType`. The policies shipped here treat it exactly like
  `touch`.
- `pin(frame_id)` marks a frame as not evictable. `unpin(frame_id)` makes it evictable again.
- `peek()` returns the next victim without removing it, or `None`.
- `evict()` removes the next victim and returns it, or returns `None`.
- `remove(frame_id)` drops an arbitrary evictable frame.
- `capacity()` is the maximum number of frames tracked. `size()` (also `len()`) is the number
  of evictable frames.

## LRU

`LruReplacer(capacity)` keeps only evictable frames. `unpin` registers a frame that is not yet
tracked and leaves a tracked one where it is; `touch` registers a frame or moves it to the most
recently used position. `pin` simply stops tracking the frame, so a pinned frame is forgotten
until it is touched or unpinned again. Any `touch`, and any `unpin` of a new frame, raises
`FrameReplacerFullError` while `capacity` frames are tracked.

```python
from pagevict.lru import LruReplacer

replacer = LruReplacer(20)
for frame in (1, 2, 3):
    replacer.unpin(frame)

replacer.touch(1)          # 1 becomes the most recently used
assert replacer.peek() == 2
assert replacer.evict() == 2
assert replacer.size() == 2
```

## LRU-K

`LruKReplacer(capacity=4096, k=2)` creates a replacer with no correlated reference period.
For full control use `LruKReplacer.with_config(LruKConfig(capacity, k, ref_period))`, where
`ref_period` is given in milliseconds and `0` means every access is uncorrelated. The
configuration in use is available as the `config` property.

Frames are registered by `touch`; `pin` and `unpin` work on frames that have already been
touched, and a pinned frame keeps its access history. Touching a new frame while `size()` has
reached the capacity raises `FrameReplacerFullError`.

```python
from pagevict.lru_k import LruKConfig, LruKReplacer

replacer = LruKReplacer.with_config(LruKConfig(capacity=7, k=2, ref_period=0))
for frame in (1, 2, 3):
    replacer.touch(frame)
replacer.touch(1)          # 1 now has two recorded accesses

assert replacer.evict() == 2   # frames with fewer than k accesses go first
```

The module also defines two constants: `LRUK_REPLACER_K` (10), a suggested look-back window,
and `LRUK_REPLACER_REF_PERIOD` (5000), a five-second correlated reference period.

## Timestamps

Accesses are ordered by hybrid logical clock timestamps from `pagevict.clock`.
`HlcGenerator().next_timestamp()` returns an `HlcTimestamp` strictly greater than every one it
returned before: wall-clock milliseconds plus a counter that breaks ties within the same
millisecond. Subtracting two timestamps gives the difference of their milliseconds, and
`as_int()` packs one into a single 64-bit integer.

## Errors

Every error is a subclass of `pagevict.errors.EvictError`:

| Error                      | Raised when                                                          |
|----------------------------|----------------------------------------------------------------------|
| `FrameReplacerFullError`   | a frame would be added beyond the capacity                           |
| `PinnedFrameRemovalError`  | `remove` is called on a pinned frame (LRU: on any untracked frame)   |
| `InvalidFrameIdError`      | `pin` or `unpin` of LRU-K is given a frame it has never seen         |
| `SequenceExhaustedError`   | the timestamp generator has reached its limit                        |

`InvalidFrameIdError` is also a `KeyError`. `InvalidTimestampError` and
`NoFramesAvailableError` are defined for use by code built on top of these policies; the
policies themselves never raise them. `remove` on LRU-K ignores frames it has never seen.

```python
from pagevict.errors import PinnedFrameRemovalError
from pagevict.lru import LruReplacer

replacer = LruReplacer(4)
replacer.unpin(3)
replacer.pin(3)
try:
    replacer.remove(3)
except PinnedFrameRemovalError as exc:
    print(exc.frame_id)    # 3
```

## What the package does not do

The policies track frame identifiers only. They hold no page data, manage no buffer pool or
free list, and read or write nothing to disk; choosing a victim is all they do.

## Running the tests

```
pip install -e ".[test]"
pytest
```