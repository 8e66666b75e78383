"""Keep API keys in the OS keychain and load them as environment variables.

sekret helps you:
- Register API keys under the env var names your tools expect
- Store the key material in the OS keychain instead of shell config files
- Emit the keys as export statements (eval "$(sekret env)")
- Find and import plaintext keys already exported in ~/.zshrc and friends
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
