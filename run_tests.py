"""
Run all resource unit tests
- Command context
- Check
- In
- Out
- Deployment packages
- Lambda manager (moto)
"""
import unittest
import sys
import os

# Looks at project root directory; used for finding lambda_resource/tests
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

if __name__ == "__main__":
    loader = unittest.TestLoader()
    suite = loader.discover(start_dir="lambda_resource/tests", pattern="*_test.py",
                            top_level_dir=os.path.abspath(os.path.dirname(__file__)))
    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)
    sys.exit(0 if result.wasSuccessful() else 1)
