# authycli

A small command line tool that shows time-based one-time passwords (TOTP)
for the tokens of an already registered device. It searches the cached
tokens by name with case-insensitive fuzzy matching, and prints its results
either as coloured terminal text or as JSON for an Alfred workflow.

## Installation

```
pip install .
```

This installs the `authy` command. Python 3.10 or later is required; the
package has no third-party dependencies.

## Where data is kept

Two files are read from your home directory, or from the directory named by
the `AUTHY_ROOT` environment variable when it is set:

- `.authy.json` holds the device registration as a JSON object with the
  keys `user_id`, `device_id`, `seed`, `api_key` and `main_password`.
  Empty fields are left out when the file is written. A registration
  without a non-zero `user_id` counts as missing.
- `.authycache.json` holds the cached tokens as a JSON array of objects
  with the keys `name`, `original_name`, `digital` (number of digits),
  `secret` (base32), `period` and `weight`.

Files the tool writes are created with mode `0600`.

## Usage

Show the codes of all cached tokens, highest weight first:

```
authy fuzz
```

Search the tokens by name and original name. Every matching token gains
one point of weight and the cache file is rewritten, so the tokens you look
up often rise to the top of the full listing:

```
authy fuzz github
```

Print the result as Alfred script filter JSON (`{"items": [...]}`), where
each item's `arg` is the current code:

```
authy fuzz github -a
```

Print the registration record read from `.authy.json`:

```
authy account
```

Remove the saved main password from `.authy.json`:

```
authy delpwd
```

Print the version:

```
authy version
```

When no registration can be read, a command that needs one prints the
reason on standard error and exits with status 1. When the token cache is
missing or unreadable, `authy fuzz` shows an "OTP tokens not found" entry
instead of codes.

## What it does not do

The tool works only from the two local files above. It does not register a
new device, and the `-c`, `-m` and `-p` options of `authy account` are
accepted but do not start a registration. It does not download, decrypt or
refresh tokens from any online service, and it never asks for a password;
`.authycache.json` has to be filled by other means.

## Codes

Codes use HMAC-SHA1 over 30-second time steps with dynamic truncation to six
decimal digits, left-padded with zeros to the token's digit count. For each
token the code of the current step is shown together with the number of
seconds left before it expires.

## Library use

The pieces behind the command can be used directly:

```python
from authycli.totp import generate_response_code, get_totp_codes, valid_totp_code

code = generate_response_code("secret", 1, 6)
previous, current, following = get_totp_codes("secret", 6, None)
ok = valid_totp_code("secret", current, None)
```

- `authycli.totp` also has `Base32Decoder`, `get_challenge` and
  `new_totp_token`.
- `authycli.token` has the `Token` dataclass and `load_tokens` /
  `save_tokens` for the cache file.
- `authycli.device.Device` reads the registration and token cache;
  it raises `DeviceNotRegisteredError` when there is no registration and
  `TokenCacheError` when the cache cannot be read.
- `authycli.search` has `fuzzy_find` and `Searcher`, whose `search()`
  returns the rendered text.
- `authycli.output` has `Output`, `render_alfred` and `render_pretty`.

## Running the tests

```
pip install ".[test]"
pytest
```