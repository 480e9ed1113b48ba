# catalog_pipeline/delegates/__init__.py

# This file makes the delegate classes directly available from the 'delegates' package.
# Instead of: from catalog_pipeline.delegates.downloader_delegate import DownloaderDelegate
# We can now use: from catalog_pipeline.delegates import DownloaderDelegate

from .downloader_delegate import DownloaderDelegate
from .file_manager_delegate import FileManagerDelegate
