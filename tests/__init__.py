"""
create_express_app test suite
=============================

Test Modules
------------
- test_models.py: Pydantic configuration models
- test_stacks.py: Database stack decision table
- test_generator.py: Template materializer
- test_runner.py: Subprocess command runner
- test_installer.py: npm installs and git initialization
- test_scaffold.py: End-to-end create_project pipeline
- test_prompts.py: Interactive questions
- test_cli.py: Command-line interface
- test_package.py: Version and license metadata

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_generator.py

    # Run specific test class
    pytest tests/test_generator.py::TestConfigureDatabase
"""
