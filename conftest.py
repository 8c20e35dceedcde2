import pytest
from pydicom import dcmwrite
from pydicom.dataset import Dataset, FileMetaDataset
from pydicom.sequence import Sequence
from pydicom.uid import ExplicitVRLittleEndian

CT_IMAGE_STORAGE = '1.2.840.10008.5.1.4.1.1.2'


class FakeElement:
    """Stand-in for a DataElement holding values pydicom would refuse."""

    def __init__(self, VR, value, tag=0x00100020):
        self.tag = tag
        self.VR = VR
        self.value = value

    @property
    def VM(self):
        if self.value is None or self.value == '':
            return 0
        if isinstance(self.value, (list, tuple)):
            return len(self.value)
        return 1


def make_ct_dataset(sop_instance_uid='1.2.3.4.5.6'):
    ds = Dataset()
    ds.SOPClassUID = CT_IMAGE_STORAGE
    ds.SOPInstanceUID = sop_instance_uid
    ds.PatientName = 'Doe^John'
    ds.PatientID = 'PAT-001'
    ds.SliceThickness = '+007'
    ds.PixelSpacing = ['0.5', '-000.50']
    ds.Rows = 2
    ds.Columns = 2
    ds.InstanceNumber = '3'

    ref = Dataset()
    ref.ReferencedSOPClassUID = CT_IMAGE_STORAGE
    ref.ReferencedSOPInstanceUID = '1.2.3.4.5.7'
    ref.add_new(0x00420011, 'OB', b'\x00\x01\x02\x03')
    ds.ReferencedImageSequence = Sequence([ref])

    ds.add_new(0x7FE00010, 'OW', b'\x00\x00' * 4)
    return ds


def write_dicom(path, ds):
    ds.file_meta = FileMetaDataset()
    ds.file_meta.TransferSyntaxUID = ExplicitVRLittleEndian
    dcmwrite(path, ds, enforce_file_format=True)
    return path


@pytest.fixture
def ct_dataset():
    return make_ct_dataset()


@pytest.fixture
def dicom_folder(tmp_path):
    """A folder holding two DICOM files and a text file."""
    source = tmp_path / "dicomfiles"
    source.mkdir()
    write_dicom(source / "IMG0001.dcm", make_ct_dataset('1.2.3.4.5.1'))
    write_dicom(source / "IMG0002.DCM", make_ct_dataset('1.2.3.4.5.2'))
    (source / "notes.txt").write_text("not a DICOM file")
    return source
