"""Create a gist from an editor selection, a file, or a list of files."""

import logging
import webbrowser
from typing import Callable, Optional

from gistkit.libs.config_loader import ConfigType, get_config
from gistkit.libs.content_collector import (
    CollectionReport,
    ContentCollector,
    HostEnvironment,
    LocalHost,
    SelectionSource,
)
from gistkit.libs.errors import AuthenticationRequiredError, EmptyGistError

from .client import GistClient, resolve_token
from .models import GistOptions, GistRequest, GistResult
from .payload import prepare_gist_request

LOG = logging.getLogger(__name__)


class GistCreator:
    """Runs one gist creation: collect, check, build the request, post."""

    def __init__(self,
                 config: ConfigType,
                 host: Optional[HostEnvironment] = None,
                 client: Optional[GistClient] = None,
                 open_url: Callable[[str], object] = webbrowser.open,
                 show_progress: bool = False):
        """Initialize the creator.

        Args:
            config: Configuration dict (required).
            host: Filesystem host; built from the ``collector`` config section if None.
            client: Gist API client; built from the ``github`` config section if None.
            open_url: Called with the gist URL when the user asked to open it.
            show_progress: Show a progress bar while collecting file lists.
        """
        self.config = config
        self.host = host or LocalHost.create_from_config(config)
        self.client = client or GistClient.create_from_config(config)
        self.open_url = open_url
        self.show_progress = show_progress

    def default_options(self, **overrides) -> GistOptions:
        """Options pre-filled from the ``gist`` config section."""
        values = {
            'is_private': not get_config('gist.public_by_default', self.config, True),
            'open_in_browser': get_config('gist.open_in_browser', self.config, False),
        }
        values.update(overrides)
        return GistOptions(**values)

    def prepare(self, source: SelectionSource, options: GistOptions) -> GistRequest:
        """Collect content for ``source`` and build the request body.

        Raises:
            SelectionError: If ``source`` isn't a valid selection.
            EmptyGistError: If nothing uploadable was collected.
        """
        report = CollectionReport()
        collector = ContentCollector(
            self.host,
            on_unreadable_file=report.record_unreadable,
            show_progress=self.show_progress,
        )
        blobs = collector.collect(source)

        unreadable = [str(error.path) for error in report.unreadable_files]
        if not blobs:
            LOG.warning("Failed to create gist: Can't create empty gist")
            raise EmptyGistError()

        LOG.info(f"Collected {len(blobs)} file(s) for the gist")
        return GistRequest(
            payload=prepare_gist_request(options.description, options.is_private, blobs),
            files=[blob.name for blob in blobs],
            unreadable_files=unreadable,
        )

    def create(self, source: SelectionSource, options: Optional[GistOptions] = None) -> GistResult:
        """Create a gist and return its URL.

        Raises:
            AuthenticationRequiredError: If a non-anonymous gist has no token.
            EmptyGistError: If nothing uploadable was collected.
            GistCreationError: If the Gist API call fails.
        """
        options = options or self.default_options()

        token = None
        if not options.anonymous:
            token = resolve_token(self.config)
            if not token:
                LOG.warning("Can't create Gist: no GitHub token configured")
                raise AuthenticationRequiredError()

        request = self.prepare(source, options)
        url = self.client.create_gist(request.payload, token)
        LOG.info(f"Gist created successfully: {url}")

        opened = False
        if options.open_in_browser:
            self.open_url(url)
            opened = True

        warning = None
        if request.unreadable_files:
            warning = f"Skipped {len(request.unreadable_files)} unreadable file(s)"
        return GistResult(
            url=url,
            files=request.files,
            unreadable_files=request.unreadable_files,
            opened_in_browser=opened,
            warning=warning,
        )
