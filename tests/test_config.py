import copy

import pytest
import yaml
from pathlib import Path

from appforge.config import Appfile, load_appfile
from appforge.io import AFPath
from appforge.exceptions import (
    AppfileMissingError,
    AppfileParsingError,
    AppfileValidationError,
    DefinitionError,
    ReferenceNotFoundError,
)

BASE_APPFILE = {
    'application': {
        'name': 'web',
        'type': 'go',
        'dependencies': [{'source': '../api'}],
    },
    'project': {
        'name': 'shop',
        'infrastructure': 'shop-aws',
    },
    'infrastructure': [
        {'name': 'shop-aws', 'type': 'aws', 'flavor': 'simple'},
        {'name': 'shop-staging', 'type': 'aws', 'flavor': 'vpc'},
    ],
}


@pytest.fixture
def create_appfile(tmp_path: Path):
    """A pytest fixture to create a temporary Appfile."""
    def _create_file(data: dict) -> Path:
        appfile = tmp_path / "web" / "Appfile"
        appfile.parent.mkdir(exist_ok=True)
        with open(appfile, 'w') as f:
            yaml.dump(data, f)
        return appfile
    return _create_file


class TestAppfileLoading:
    """Tests for basic loading and validation success/failure."""

    def test_load_valid_appfile(self, create_appfile):
        """Should expose application, project and infrastructure."""
        path = create_appfile(BASE_APPFILE)
        appfile = Appfile(str(path))
        assert appfile.name == 'web'
        assert appfile.type == 'go'
        assert appfile.dir == AFPath(str(path.parent))
        assert appfile.active_infrastructure().flavor == 'simple'

    def test_missing_section_raises_error(self, create_appfile):
        """Should raise AppfileValidationError if a required section is missing."""
        data = copy.deepcopy(BASE_APPFILE)
        del data['project']
        path = create_appfile(data)

        with pytest.raises(AppfileValidationError, match="project\n  Field required"):
            Appfile(str(path))

    def test_empty_application_type_raises_error(self, create_appfile):
        data = copy.deepcopy(BASE_APPFILE)
        data['application']['type'] = ''
        path = create_appfile(data)

        with pytest.raises(AppfileValidationError):
            Appfile(str(path))

    def test_file_not_found_raises_error(self, tmp_path):
        """Should raise AppfileMissingError for a non-existent file."""
        with pytest.raises(AppfileMissingError):
            Appfile(str(tmp_path / "nope" / "Appfile"))

    def test_invalid_yaml_raises_error(self, tmp_path):
        """Should raise AppfileParsingError for malformed YAML."""
        appfile = tmp_path / "Appfile"
        appfile.write_text("key: value: another")

        with pytest.raises(AppfileParsingError, match="Error parsing Appfile"):
            Appfile(str(appfile))

    def test_non_mapping_raises_error(self, tmp_path):
        appfile = tmp_path / "Appfile"
        appfile.write_text("- just\n- a list\n")

        with pytest.raises(AppfileParsingError, match="dictionary"):
            Appfile(str(appfile))

    def test_extra_application_settings_are_kept(self, create_appfile):
        data = copy.deepcopy(BASE_APPFILE)
        data['application']['go_version'] = '1.22'
        appfile = Appfile(str(create_appfile(data)))
        assert appfile.application.model_extra == {'go_version': '1.22'}

    def test_content_hash_follows_bytes(self, create_appfile):
        path = create_appfile(BASE_APPFILE)
        first = Appfile(str(path)).content_hash
        assert Appfile(str(path)).content_hash == first

        path.write_text(path.read_text() + "\n# comment\n")
        assert Appfile(str(path)).content_hash != first


class TestAppfileValidationLogic:
    """Tests for cross-reference validation."""

    def test_undefined_project_infrastructure_raises_error(self, create_appfile):
        data = copy.deepcopy(BASE_APPFILE)
        data['project']['infrastructure'] = 'shop-gcp'
        path = create_appfile(data)

        with pytest.raises(ReferenceNotFoundError, match="'shop-gcp', which is not defined"):
            Appfile(str(path))

    def test_duplicate_infrastructure_name_raises_error(self, create_appfile):
        data = copy.deepcopy(BASE_APPFILE)
        data['infrastructure'].append({'name': 'shop-aws', 'type': 'gcp', 'flavor': 'simple'})
        path = create_appfile(data)

        with pytest.raises(DefinitionError, match="'shop-aws' is defined more than once"):
            Appfile(str(path))


class TestDependencyPaths:

    def test_directory_source_resolves_to_appfile(self, create_appfile, tmp_path):
        (tmp_path / "api").mkdir()
        appfile = Appfile(str(create_appfile(BASE_APPFILE)))

        assert appfile.dependency_paths() == [AFPath(str(tmp_path / "api" / "Appfile"))]

    def test_file_source_is_used_as_is(self, create_appfile, tmp_path):
        data = copy.deepcopy(BASE_APPFILE)
        data['application']['dependencies'] = [{'source': str(tmp_path / "api.yml")}]
        appfile = Appfile(str(create_appfile(data)))

        assert appfile.dependency_paths() == [AFPath(str(tmp_path / "api.yml"))]


class TestLoadAppfile:

    def test_directory_means_appfile_inside(self, create_appfile):
        path = create_appfile(BASE_APPFILE)
        assert load_appfile(str(path.parent)).path == AFPath(str(path))

    def test_missing_path_raises_error(self, tmp_path):
        with pytest.raises(AppfileMissingError, match="does not exist"):
            load_appfile(str(tmp_path / "missing"))
