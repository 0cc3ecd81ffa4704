"""Finding the Terraform Enterprise API token.

Sources are consulted in order, first hit wins:

1. A value passed by the caller
2. ``TFE_TOKEN`` (including values loaded from a .env file by python-dotenv)
3. The file named by ``TFE_TOKEN_FILE``
4. The Terraform CLI credentials file written by ``terraform login``
   (``~/.terraform.d/credentials.tfrc.json``), keyed by API hostname

Example:
    ```python
    from tfe_client.auth import CredentialResolver

    resolver = CredentialResolver()
    token = resolver.resolve_token(hostname="tfe.example.com", required=True)

    # Non-secret settings go through the same lookup
    address = resolver.resolve(env_var_name="TFE_ADDRESS", default="https://app.terraform.io", mask_in_logs=False)
    ```

Token values never appear in logs; only the source they came from does.
"""

import json
import logging
import os
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from tfe_client.auth.exceptions import CredentialFileError, CredentialNotFoundError

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "TFE_TOKEN"
TOKEN_FILE_ENV_VAR = "TFE_TOKEN_FILE"
CLI_CONFIG_PATH = "~/.terraform.d/credentials.tfrc.json"


def _expand(path: str | Path) -> Path:
    return Path(os.path.expanduser(os.path.expandvars(str(path))))


class CredentialResolver:
    """Resolve the API token and other settings from explicit values, the environment and files.

    Args:
        dotenv_path: .env file to load; None lets python-dotenv search upwards
            from the working directory.
        load_dotenv: Load the .env file on construction. Tests pass False.
        cli_config_path: Terraform CLI credentials file used by :meth:`resolve_token`.
    """

    def __init__(
        self,
        dotenv_path: str | None = None,
        load_dotenv: bool = True,
        cli_config_path: str | Path = CLI_CONFIG_PATH,
    ):
        self._dotenv_path = dotenv_path
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._cli_config_path = cli_config_path

        if load_dotenv:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        """Load .env into ``os.environ`` at most once per resolver."""
        with self._dotenv_lock:
            if self._dotenv_loaded:
                return
            try:
                found = load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug(f"Loaded .env for settings resolution: {found}")
            except OSError as e:
                logger.warning(f"Could not load .env file: {e}")
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Return the first of ``value``, ``$env_var_name`` and ``default`` that is set.

        Args:
            value: Explicit value, used even when empty
            env_var_name: Environment variable to read
            default: Fallback
            required: Raise instead of returning None
            mask_in_logs: Log ``***`` instead of the value

        Raises:
            CredentialNotFoundError: If required=True and nothing is set
        """
        candidates = (
            (value, "explicit parameter"),
            (os.environ.get(env_var_name) if env_var_name else None, f"environment variable '{env_var_name}'"),
            (default, "default value"),
        )
        for candidate, source in candidates:
            if candidate is not None:
                shown = "***" if mask_in_logs else candidate
                logger.debug(f"Resolved {env_var_name or 'value'} from {source}: {shown}")
                return candidate

        if required:
            message = "Required credential not found"
            if env_var_name:
                message += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(message, env_var_name=env_var_name)
        return None

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Read a credential from ``file_path``, or from the file named by ``$env_var_name``.

        ``~`` and ``$VAR`` in the path are expanded and the contents are
        stripped. A missing or unreadable file gives None unless required.

        Raises:
            CredentialFileError: If required=True and no file could be read
        """
        location = str(file_path) if file_path is not None else None
        if location is None and env_var_name:
            location = self.resolve(env_var_name=env_var_name, mask_in_logs=False)

        if not location:
            if required:
                hint = f" (env var '{env_var_name}' not set)" if env_var_name else ""
                raise CredentialFileError(f"No file path provided for credential resolution{hint}")
            return None

        path = _expand(location)
        content = self._read(path, required=required)
        if content is not None:
            logger.debug(f"Resolved credential from file {path} (***)")
        return content

    @staticmethod
    def _read(path: Path, *, required: bool) -> str | None:
        try:
            return path.read_text().strip()
        except FileNotFoundError:
            message = f"Credential file not found: {path}"
            if required:
                raise CredentialFileError(message) from None
            logger.debug(message)
        except PermissionError:
            message = f"Permission denied reading credential file: {path}"
            if required:
                raise CredentialFileError(message) from None
            logger.warning(message)
        except OSError as e:
            message = f"Error reading credential file {path}: {e}"
            if required:
                raise CredentialFileError(message) from e
            logger.warning(message)
        return None

    def resolve_from_cli_config(self, hostname: str) -> str | None:
        """Read the token Terraform CLI stored for ``hostname`` with ``terraform login``.

        The file looks like ``{"credentials": {"app.terraform.io": {"token": "..."}}}``.

        Raises:
            CredentialFileError: If the file exists but is not valid JSON
        """
        path = _expand(self._cli_config_path)
        raw = self._read(path, required=False)
        if raw is None:
            return None

        try:
            config = json.loads(raw)
        except ValueError as e:
            raise CredentialFileError(f"Invalid Terraform CLI credentials file {path}: {e}") from e

        credentials = config.get("credentials") if isinstance(config, dict) else None
        entry = credentials.get(hostname) if isinstance(credentials, dict) else None
        token = entry.get("token") if isinstance(entry, dict) else None
        if token:
            logger.debug(f"Resolved token for {hostname} from Terraform CLI credentials (***)")
        return token

    def resolve_token(
        self,
        *,
        value: str | None = None,
        hostname: str = "app.terraform.io",
        required: bool = False,
    ) -> str | None:
        """Resolve the API token for ``hostname``, walking every source in order.

        Raises:
            CredentialNotFoundError: If required=True and no source had a token
        """
        token = (
            self.resolve(value=value, env_var_name=TOKEN_ENV_VAR)
            or self.resolve_from_file(env_var_name=TOKEN_FILE_ENV_VAR)
            or self.resolve_from_cli_config(hostname)
        )

        if required and not token:
            raise CredentialNotFoundError(
                f"No API token found for {hostname} "
                f"(checked {TOKEN_ENV_VAR}, {TOKEN_FILE_ENV_VAR}, {self._cli_config_path})",
                env_var_name=TOKEN_ENV_VAR,
            )
        return token
