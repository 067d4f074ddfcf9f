"""
Builds Lambda deployment packages from the put params' code source
"""
import hashlib
import io
import os
import zipfile
from lambda_resource.exceptions import ConfigurationError
from lambda_resource.models import CodeSource
from lambda_resource.utils.logger import logger

class LambdaDeploymentManager:
    def package(self, code_source: CodeSource) -> bytes:
        """Return the deployment package for a code source
        Args:
            code_source: a zip file (used as-is), a code directory or a single code file
        Return:
            the ZIP archive as bytes
        """
        try:
            if code_source.kind == CodeSource.ZIP_FILE:
                with open(code_source.path, 'rb') as f:
                    data = f.read()
            elif code_source.kind == CodeSource.CODE_DIR:
                data = self.zip_directory(code_source.path)
            else:
                data = self.zip_file(code_source.path)
        except OSError as e:
            raise ConfigurationError(
                f'could not read the {code_source.kind} "{code_source.path}" ({e})') from e

        logger.info(f'[INFO] zip file hash {hashlib.md5(data).hexdigest()}')
        return data

    def zip_directory(self, source_path: str) -> bytes:
        """Creates a ZIP archive of a directory tree
        Args:
            source_path: the local directory
        Return:
            the archive as bytes, every file stored at its path relative to source_path
        """
        if not os.path.isdir(source_path):
            raise NotADirectoryError(f'"{source_path}" is not a directory')

        zip_buffer = io.BytesIO()
        with zipfile.ZipFile(zip_buffer, 'w', zipfile.ZIP_DEFLATED) as zipf:
            for root, dirs, files in os.walk(source_path, onerror=_raise):
                dirs.sort()
                for file in sorted(files):
                    file_path = os.path.join(root, file)
                    arcname = os.path.relpath(file_path, start=source_path)
                    zipf.write(file_path, arcname.replace(os.sep, '/'))

        return zip_buffer.getvalue()

    def zip_file(self, source_path: str) -> bytes:
        """Creates a ZIP archive holding a single file under its base name
        Args:
            source_path: the local file
        Return:
            the archive as bytes
        """
        zip_buffer = io.BytesIO()
        with zipfile.ZipFile(zip_buffer, 'w', zipfile.ZIP_DEFLATED) as zipf:
            zipf.write(source_path, arcname=os.path.basename(source_path))

        return zip_buffer.getvalue()


def _raise(error: OSError) -> None:
    # os.walk skips unreadable directories unless told otherwise
    raise error
