# imtools

Small building blocks for instant-messaging services.

| Module | What it gives you |
| --- | --- |
| `imtools.slices` | Generic list/set/dict helpers: `distinct`, `slice_sub`, `single`, `complete`, `both_exist`, `order`, `paginate`, `delete`, `sort_values`, `struct_field_not_nil_replace` and more |
| `imtools.splitter` | `Splitter` cuts a list of strings into `SplitResult` chunks of a fixed size |
| `imtools.strutil` | Lenient integer parsing, de-duplication, base64, CRC-32, compact JSON, conversation IDs (`gen_conversation_id_for_single`, `gen_group_conversation_id`, ...) and message/operation ID generation |
| `imtools.encryption` | `md5` hex digests with an optional salt; `aes_encrypt` / `aes_decrypt` (AES-CBC, PKCS#7, IV taken from the key) |
| `imtools.fileutil` | `is_dir`, `is_file`, `mk_dir`, and `byte_size` for readable sizes such as `1.5K` |
| `imtools.syncmap` | `SyncMap`, a lock-protected dictionary; JSON and option-switch helpers |
| `imtools.timeutil` | Unix timestamps in seconds, milliseconds and nanoseconds; day-zero timestamps; date parsing and formatting |
| `imtools.idgen` | `SnowflakeNode` and `gen_id` for unique, time-ordered IDs |
| `imtools.retry` | `do` retries a function with constant, linear or Fibonacci back-off, a time limit and cancellation |
| `imtools.interceptor` | `intercept_chain` combines unary server interceptors into one |

## Install

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## Examples

Collections:

```python
from imtools.slices import distinct, paginate, slice_sub

print(distinct([1, 1, 2, 3, 3]))        # [1, 2, 3]
print(paginate(list(range(10)), 2, 3))  # [3, 4, 5]
print(slice_sub([1, 2, 3, 2], [3]))     # [1, 2]
```

Chunks:

```python
from imtools.splitter import Splitter

for chunk in Splitter(2, ["a", "b", "c"]).get_split_result():
    print(chunk.item)   # ['a', 'b'] then ['c']
```

Conversation IDs and sizes:

```python
from imtools.strutil import gen_conversation_id_for_single
from imtools.fileutil import byte_size

print(gen_conversation_id_for_single("b", "a"))  # si_a_b
print(byte_size(1536))                           # 1.5K
```

Hashing and encryption:

```python
import os
from imtools.encryption import md5, aes_encrypt, aes_decrypt

print(md5("go"))  # 34d1f91fb2e514b8576fab1a75a89a6b

key = os.urandom(16)
assert aes_decrypt(aes_encrypt(b"hello", key), key) == b"hello"
```

IDs:

```python
from imtools.idgen import gen_id

print(gen_id())
```

Retries with Fibonacci back-off:

```python
from imtools import retry

strategy = retry.make_strategy(retry.BackoffStrategy.FIBONACCI, 0.1)
result = retry.do(lambda: 42, strategy=strategy, max_retry_times=5)
```

`do` raises `RetryFailed` when every attempt fails, `RetryAbort` when the
retry checker says stop, `RetryTimeout` when the time limit runs out and
`ContextDeadlineExceeded` once the given `cancel_event` is set.

A thread-safe map:

```python
from imtools.syncmap import SyncMap

m = SyncMap()
m.set("k", 1)
print(m.test_and_set("k", 2))  # 1
```

## What it does not do

The package holds helpers only. It has no error-code types, no builder for
HTTP API responses, no request-context object, no JWT handling, no logger,
and no clients for databases, message queues or service discovery. It runs
no server and installs no command.

## Tests

```
pytest
```