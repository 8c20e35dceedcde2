from pydicom.dataset import Dataset
from pydicom.sequence import Sequence

from services.bulk_data_filter import BULK_DATA_VRS, remove_bulk_data


def _all_vrs(ds):
    """Return the VRs of every element of `ds`, nested ones included."""
    vrs = []
    for elem in ds:
        vrs.append(elem.VR)
        if elem.VR == 'SQ':
            for item in elem.value:
                vrs.extend(_all_vrs(item))
    return vrs


class TestRemoveBulkData:
    def test_removes_top_level_bulk_elements(self):
        ds = Dataset()
        ds.PatientID = 'PAT-001'
        ds.add_new(0x7FE00010, 'OW', b'\x00\x00')
        ds.add_new(0x00420011, 'OB', b'\x01\x02')

        result = remove_bulk_data(ds)

        assert result is ds
        assert 0x7FE00010 not in ds
        assert 0x00420011 not in ds
        assert ds.PatientID == 'PAT-001'

    def test_every_bulk_vr_removed(self):
        ds = Dataset()
        for offset, vr in enumerate(sorted(BULK_DATA_VRS)):
            ds.add_new(0x00091010 + offset, vr, b'\x00\x00\x00\x00\x00\x00\x00\x00')
        ds.PatientID = 'PAT-001'

        remove_bulk_data(ds)

        assert [elem.keyword for elem in ds] == ['PatientID']

    def test_ov_is_kept(self):
        ds = Dataset()
        ds.add_new(0x00091001, 'OV', b'\x00' * 8)

        remove_bulk_data(ds)

        assert 0x00091001 in ds

    def test_nested_sequences_filtered(self):
        inner = Dataset()
        inner.add_new(0x00420011, 'OB', b'\x00\x01')
        inner.ReferencedSOPInstanceUID = '1.2.3'

        middle = Dataset()
        middle.add_new(0x7FE00010, 'OW', b'\x00\x00')
        middle.ReferencedImageSequence = Sequence([inner])

        ds = Dataset()
        ds.SourceImageSequence = Sequence([middle])

        remove_bulk_data(ds)

        assert not BULK_DATA_VRS.intersection(_all_vrs(ds))
        middle = ds.SourceImageSequence[0]
        assert 0x7FE00010 not in middle
        inner = middle.ReferencedImageSequence[0]
        assert [elem.keyword for elem in inner] == ['ReferencedSOPInstanceUID']

    def test_sequence_kept_when_emptied(self):
        item = Dataset()
        item.add_new(0x00420011, 'OB', b'\x00\x01')
        ds = Dataset()
        ds.ReferencedImageSequence = Sequence([item])

        remove_bulk_data(ds)

        assert 'ReferencedImageSequence' in ds
        assert len(ds.ReferencedImageSequence) == 1
        assert len(ds.ReferencedImageSequence[0]) == 0

    def test_ambiguous_vr_with_bytes_removed(self):
        ds = Dataset()
        ds.add_new(0x7FE00010, 'OB or OW', b'\x00\x00')

        remove_bulk_data(ds)

        assert 0x7FE00010 not in ds

    def test_empty_dataset_and_sequence(self):
        ds = Dataset()
        assert len(remove_bulk_data(ds)) == 0

        ds.ReferencedImageSequence = Sequence([])
        remove_bulk_data(ds)
        assert 'ReferencedImageSequence' in ds
