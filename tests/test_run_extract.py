import json

import pytest
from click.testing import CliRunner

from conftest import make_ct_dataset, write_dicom
from run_extract import load_file_list, main


class TestLoadFileList:
    def test_csv(self, tmp_path):
        listing = tmp_path / 'files.csv'
        listing.write_text('path\n/data/a.dcm\n  /data/b.dcm  \n\n/data/c.dcm\n', encoding='utf-8')

        assert load_file_list(str(listing)) == ['/data/a.dcm', '/data/b.dcm', '/data/c.dcm']

    def test_empty_csv(self, tmp_path):
        listing = tmp_path / 'files.csv'
        listing.write_text('path\n', encoding='utf-8')

        assert load_file_list(str(listing)) == []

    def test_unsupported_format(self, tmp_path):
        listing = tmp_path / 'files.txt'
        listing.write_text('a.dcm\n', encoding='utf-8')

        with pytest.raises(ValueError):
            load_file_list(str(listing))


class TestMain:
    def test_extracts_listed_files(self, tmp_path):
        first = write_dicom(tmp_path / 'first.dcm', make_ct_dataset('1.2.3.1'))
        second = write_dicom(tmp_path / 'second.dcm', make_ct_dataset('1.2.3.2'))
        listing = tmp_path / 'files.csv'
        listing.write_text(f'path\n{first}\n{second}\n', encoding='utf-8')
        output = tmp_path / 'out'

        result = CliRunner().invoke(main, ['-f', str(listing), '-o', str(output)])

        assert result.exit_code == 0, result.output
        metadata = json.loads((output / 'second.json').read_text(encoding='utf-8'))
        assert metadata['SOPInstanceUID'] == {'vr': 'UI', 'Value': ['1.2.3.2']}
        assert (output / 'first.json').exists()
