"""
Test LambdaDeploymentManager deployment package creation.
"""
import io
import unittest
import zipfile
from unittest import mock
from lambda_resource.exceptions import ConfigurationError
from lambda_resource.managers.deployment_manager import LambdaDeploymentManager
from lambda_resource.models import CodeSource
from lambda_resource.tests.core import TempDirMixin

class LambdaDeploymentManagerTest(TempDirMixin, unittest.TestCase):
    def setUp(self):
        """Set up a code tree
        """
        super().setUp()
        self.manager = LambdaDeploymentManager()
        self.root = self.write('code/a.txt', 'alpha').rsplit('/', 1)[0]
        self.write('code/sub/b.txt', 'beta')

    def entries(self, data):
        with zipfile.ZipFile(io.BytesIO(data)) as zipf:
            return {name: zipf.read(name) for name in zipf.namelist()}

    def test_zip_directory(self):
        """Test LambdaDeploymentManager.zip_directory keeps relative paths and nothing else
        """
        data = self.manager.zip_directory(self.root)
        self.assertEqual(self.entries(data), {'a.txt': b'alpha', 'sub/b.txt': b'beta'})

    def test_zip_directory_not_a_directory(self):
        """Test LambdaDeploymentManager.zip_directory rejects files
        """
        with self.assertRaises(NotADirectoryError):
            self.manager.zip_directory(self.root + '/a.txt')

    def test_zip_file(self):
        """Test LambdaDeploymentManager.zip_file stores the file under its base name
        """
        data = self.manager.zip_file(self.root + '/sub/b.txt')
        self.assertEqual(self.entries(data), {'b.txt': b'beta'})

    def test_package(self):
        """Test LambdaDeploymentManager.package for every code source kind
        """
        dir_data = self.manager.package(CodeSource(kind=CodeSource.CODE_DIR, path=self.root))
        self.assertEqual(set(self.entries(dir_data)), {'a.txt', 'sub/b.txt'})

        file_data = self.manager.package(CodeSource(kind=CodeSource.CODE_FILE, path=self.root + '/a.txt'))
        self.assertEqual(self.entries(file_data), {'a.txt': b'alpha'})

        zip_path = self.directory + '/function.zip'
        with open(zip_path, 'wb') as f:
            f.write(dir_data)
        zip_data = self.manager.package(CodeSource(kind=CodeSource.ZIP_FILE, path=zip_path))
        self.assertEqual(zip_data, dir_data)

    def test_unreadable_subdirectory(self):
        """Test a subdirectory that cannot be listed fails the package instead of being skipped
        """
        def walk(top, onerror=None):
            yield top, ['sub'], ['a.txt']
            if onerror is not None:
                onerror(PermissionError(13, 'Permission denied', top + '/sub'))

        with mock.patch('lambda_resource.managers.deployment_manager.os.walk', walk):
            with self.assertRaises(PermissionError):
                self.manager.zip_directory(self.root)
            with self.assertRaises(ConfigurationError):
                self.manager.package(CodeSource(kind=CodeSource.CODE_DIR, path=self.root))

    def test_package_missing_path(self):
        """Test LambdaDeploymentManager.package reports unreadable code sources
        """
        for kind in (CodeSource.ZIP_FILE, CodeSource.CODE_DIR, CodeSource.CODE_FILE):
            with self.assertRaises(ConfigurationError):
                self.manager.package(CodeSource(kind=kind, path=self.directory + '/missing'))

if __name__ == '__main__':
    unittest.main()
