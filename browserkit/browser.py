"""Cross-platform browser utilities."""

from rich.console import Console
from rich.markup import escape

from .config import Settings, load_settings
from .errors import DisposedError, LaunchFailedError
from .launchers import Launcher, get_launcher
from .platforms import LaunchMode, Platform, detect_platform
from .url import QueryParams, form_url


class BrowserHandler:
    """Opens http(s) URLs in the user's default browser, optionally with query parameters.

    Works on Windows, macOS, Linux and FreeBSD. Use it in a `with` block, or
    call close() when done; a closed handler raises DisposedError on every
    operation. A handler is not safe to share between threads.

    Example:
        with BrowserHandler() as handler:
            handler.open_url("https://www.example.com", {"q": "hello world"})
    """

    def __init__(
        self,
        platform: Platform | None = None,
        mode: LaunchMode | None = None,
        settings: Settings | None = None,
        console: Console | None = None,
    ):
        """
        Args:
            platform: Target platform. Detected from the running interpreter when omitted.
            mode: Launch mode. Taken from settings when omitted.
            settings: Settings to use. Loaded from the config file and environment when omitted.
            console: Console for warnings. Defaults to a stderr console.

        Raises:
            UnsupportedPlatformError: If platform is omitted and the running OS is unsupported.
        """
        self.settings = load_settings() if settings is None else settings
        self.platform = detect_platform() if platform is None else Platform(platform)
        self.mode = self.settings.launch_mode if mode is None else LaunchMode(mode)
        self.console = Console(stderr=True) if console is None else console
        self._launcher: Launcher | None = get_launcher(self.platform, self.mode)
        self._closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the handler. Calling it again has no effect."""
        self._launcher = None
        self._closed = True

    def _ensure_open(self) -> Launcher:
        if self._closed or self._launcher is None:
            raise DisposedError()
        return self._launcher

    def form_url(self, url: str, query_params: QueryParams | None = None) -> str:
        """Sanitize url and append query_params without launching anything."""
        self._ensure_open()
        return form_url(url, query_params, platform=self.platform, mode=self.mode)

    def open_url(self, url: str, query_params: QueryParams | None = None) -> bool:
        """
        Open url in the default browser, with query_params appended.

        Keys and values of query_params are converted to their text form, so
        any objects may be passed. Blocks until the opener has exited.

        Args:
            url: The http(s) URL to open.
            query_params: Optional mapping, or iterable of (key, value) pairs.

        Returns:
            True if the opener reported success. False if it exited non-zero and
            settings.raise_on_failure is off.

        Raises:
            DisposedError: If the handler has been closed.
            MalformedURLError: If url is not an http(s) URL.
            KeyCollisionError: If query keys coincide after conversion and filtering.
            LaunchFailedError: If the opener could not be started, or exited non-zero
                while settings.raise_on_failure is on.
        """
        launcher = self._ensure_open()
        final_url = form_url(url, query_params, platform=self.platform, mode=self.mode)

        try:
            exit_code = launcher.launch(final_url)
        except OSError as e:
            raise LaunchFailedError(final_url, reason=str(e)) from e

        if exit_code == 0:
            return True

        if self.settings.raise_on_failure:
            raise LaunchFailedError(final_url, exit_code=exit_code)
        if not self.settings.quiet:
            message = f"opening [{final_url}] failed with non-zero exit code [{exit_code}]!"
            self.console.print(f"[bold yellow]Warning:[/] {escape(message)}", highlight=False)
        return False


def open_url(url: str, query_params: QueryParams | None = None, **handler_kwargs) -> bool:
    """
    Open a URL in the user's default web browser.

    Scopes a BrowserHandler around a single call. handler_kwargs are passed
    to BrowserHandler (platform, mode, settings, console).

    Returns:
        True if the browser was opened successfully, False otherwise.
    """
    with BrowserHandler(**handler_kwargs) as handler:
        return handler.open_url(url, query_params)
