"""
File and HTTP loading for VTTCore.

Reads WebVTT documents from local files, direct HTTP(S) URLs and HLS
playlists (M3U8) whose segments are VTT files, and saves documents as
canonical WebVTT text. Files are read and written as UTF-8.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

import requests

from .errors import VTTDownloadError, WebVTTParseError
from .models import DownloadConfig, WebVTT
from .parser import loads
from .writer import write_webvtt

logger = logging.getLogger(__name__)


def is_hls_playlist(content: str) -> bool:
    """
    Check if content is an HLS playlist (M3U8 format).

    Args:
        content: Content to check

    Returns:
        True if content is HLS playlist, False otherwise
    """
    return content.lstrip('\ufeff').strip().startswith('#EXTM3U')


def load_file(path: str) -> WebVTT:
    """
    Parse a WebVTT file.

    Raises:
        WebVTTParseError: If the file is not valid WebVTT
        OSError: If the file cannot be read
    """
    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()
    document = loads(content)
    logger.info(f"Loaded {len(document.cues)} cues from {path}")
    return document


def save_file(document: WebVTT, path: str, validate: bool = False) -> str:
    """
    Write a document to ``path`` as canonical WebVTT text.

    Args:
        document: Document to save
        path: Destination file; parent directories are created
        validate: Refuse to write documents that would not round-trip

    Returns:
        The path written
    """
    content = write_webvtt(document, validate=validate)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='\n') as f:
        f.write(content)
    logger.info(f"Saved {len(document.cues)} cues to {path}")
    return path


def _segment_urls(playlist_url: str, playlist_content: str) -> List[str]:
    segment_urls = []
    base_url = playlist_url.rsplit('/', 1)[0]
    for line in playlist_content.split('\n'):
        line = line.strip()
        # Skip tags and comments
        if not line or line.startswith('#'):
            continue
        if line.startswith('http://') or line.startswith('https://'):
            segment_urls.append(line)
        else:
            segment_urls.append(f"{base_url}/{line.lstrip('/')}")
    return segment_urls


def download_vtt_segments_from_hls(playlist_url: str, timeout: int = 30, verify_ssl: bool = True,
                                   playlist_content: Optional[str] = None) -> WebVTT:
    """
    Download every VTT segment listed in an HLS playlist into one document.

    Segment cues are appended in playlist order and segment metadata is
    merged (later segments win). A segment that cannot be downloaded or
    parsed is logged and skipped.

    Args:
        playlist_url: URL to HLS playlist (M3U8)
        timeout: Request timeout in seconds (default: 30)
        verify_ssl: Whether to verify SSL certificates
        playlist_content: Playlist text if already fetched

    Returns:
        Merged WebVTT document

    Raises:
        VTTDownloadError: If the playlist itself cannot be downloaded
    """
    if playlist_content is None:
        try:
            response = requests.get(playlist_url, timeout=timeout, verify=verify_ssl)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to download HLS playlist: {str(e)}")
            raise VTTDownloadError(f"HLS playlist download failed: {str(e)}")
        playlist_content = response.text

    segment_urls = _segment_urls(playlist_url, playlist_content)
    logger.info(f"Found {len(segment_urls)} VTT segments in playlist")

    merged = WebVTT()
    for i, segment_url in enumerate(segment_urls):
        try:
            logger.debug(f"Downloading segment {i+1}/{len(segment_urls)}")
            seg_response = requests.get(segment_url, timeout=timeout, verify=verify_ssl)
            seg_response.raise_for_status()
            segment = loads(seg_response.text)
        except (requests.RequestException, WebVTTParseError) as e:
            logger.warning(f"Failed to load segment {i+1}: {str(e)}, continuing...")
            continue

        for key, value in segment.metadata.items():
            merged.add_metadata(key, value)
        for cue in segment.cues:
            merged.add_cue(cue)

    logger.info(f"Merged {len(segment_urls)} VTT segments into {len(merged.cues)} cues")
    return merged


class VTTDownloader:
    """
    Fetches WebVTT documents over HTTP(S).

    Handles direct VTT URLs and HLS playlists of VTT segments. ``download``
    also saves the canonical text to ``{output_dir}/{stream_id}.vtt``.
    """

    def __init__(self, timeout: int = 30, verify_ssl: bool = True):
        """
        Initialize VTT downloader.

        Args:
            timeout: Default request timeout in seconds
            verify_ssl: Default for SSL certificate verification
        """
        self.timeout = timeout
        self.verify_ssl = verify_ssl

    def fetch(self, url: str, timeout: Optional[int] = None,
              verify_ssl: Optional[bool] = None) -> WebVTT:
        """
        Download and parse a VTT document.

        Args:
            url: Direct VTT URL or M3U8 playlist URL
            timeout: Request timeout in seconds (default: downloader setting)
            verify_ssl: Whether to verify SSL certificates (default: downloader setting)

        Returns:
            Parsed WebVTT document

        Raises:
            VTTDownloadError: If the HTTP request fails
            WebVTTParseError: If the response is not valid WebVTT
        """
        timeout = self.timeout if timeout is None else timeout
        verify_ssl = self.verify_ssl if verify_ssl is None else verify_ssl

        logger.info(f"Downloading VTT from: {url[:100]}...")
        try:
            response = requests.get(url, timeout=timeout, verify=verify_ssl)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to download VTT from {url[:100]}: {str(e)}")
            raise VTTDownloadError(f"VTT download failed: {str(e)}")

        content = response.text
        if is_hls_playlist(content):
            logger.info("Detected HLS playlist format, downloading segments")
            return download_vtt_segments_from_hls(
                url, timeout=timeout, verify_ssl=verify_ssl, playlist_content=content
            )

        return loads(content)

    def download(
        self,
        url: str,
        output_dir: str,
        stream_id: Optional[str] = None,
        timeout: Optional[int] = None,
        verify_ssl: Optional[bool] = None,
    ) -> str:
        """
        Download a VTT document and save it as canonical WebVTT text.

        Args:
            url: URL to download VTT file from (direct VTT or M3U8 playlist)
            output_dir: Directory to save the VTT file
            stream_id: Base name for the local file (default: derived from URL)
            timeout: Request timeout in seconds
            verify_ssl: Whether to verify SSL certificates

        Returns:
            Local file path where VTT was saved

        Raises:
            VTTDownloadError: If download or save fails
            WebVTTParseError: If the downloaded content is not valid WebVTT
        """
        if not stream_id:
            stream_id = Path(url.split('?', 1)[0]).stem or "downloaded"

        document = self.fetch(url, timeout=timeout, verify_ssl=verify_ssl)

        path = self.get_vtt_path(output_dir, stream_id)
        try:
            return save_file(document, path)
        except OSError as e:
            logger.error(f"Failed to save VTT: {str(e)}")
            raise VTTDownloadError(f"VTT save failed: {str(e)}")

    def download_from_config(self, config: DownloadConfig) -> str:
        """
        Download VTT using a DownloadConfig object.

        Args:
            config: DownloadConfig object with download parameters

        Returns:
            Local file path where VTT was saved
        """
        return self.download(
            url=config.url,
            output_dir=config.output_dir,
            stream_id=config.stream_id,
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
        )

    def get_vtt_path(self, output_dir: str, stream_id: str) -> str:
        """Get the local path where the VTT file for ``stream_id`` is stored."""
        return os.path.join(output_dir, f"{stream_id}.vtt")

    def vtt_exists(self, output_dir: str, stream_id: str) -> bool:
        return os.path.exists(self.get_vtt_path(output_dir, stream_id))
