from fabquote.core.constants import MAX_FILE_SIZE
from fabquote.models.upload import UploadDescriptor
from fabquote.services.upload_policy import (
    canonical_content_type,
    file_extension,
    validate_batch,
    validate_descriptor,
)


def descriptor(name: str = "part.pdf", file_type: str = "application/pdf", size: int = 1000):
    return UploadDescriptor(file_name=name, file_type=file_type, file_size=size)


def test_size_ceiling_is_inclusive():
    assert validate_descriptor(descriptor(size=52_428_800)).accepted
    verdict = validate_descriptor(descriptor(size=52_428_801))
    assert not verdict.accepted
    assert "50MB" in verdict.reason
    assert MAX_FILE_SIZE == 52_428_800


def test_unknown_extension_rejected_regardless_of_type():
    for file_type in ("application/pdf", "application/octet-stream", "model/stl", "text/plain"):
        verdict = validate_descriptor(descriptor(name="part.xyz", file_type=file_type))
        assert not verdict.accepted
        assert ".xyz is not allowed" in verdict.reason


def test_extension_match_is_case_insensitive():
    assert validate_descriptor(descriptor(name="part.STL", file_type="model/stl")).accepted
    assert validate_descriptor(descriptor(name="Drawing.PDF", file_type="application/pdf")).accepted


def test_missing_extension_rejected():
    verdict = validate_descriptor(descriptor(name="README", file_type="application/pdf"))
    assert not verdict.accepted
    assert verdict.reason == "File must have a valid extension"


def test_generic_binary_type_accepted_for_cad_files():
    for name in ("bracket.dwg", "panel.dxf", "housing.step", "housing.stp", "shaft.igs", "shell.iges"):
        assert validate_descriptor(descriptor(name=name, file_type="application/octet-stream")).accepted


def test_alternate_family_types_accepted():
    assert validate_descriptor(descriptor(name="bracket.dwg", file_type="image/vnd.dwg")).accepted
    assert validate_descriptor(descriptor(name="part.stl", file_type="application/sla")).accepted
    assert validate_descriptor(descriptor(name="part.step", file_type="application/x-step")).accepted


def test_type_mismatch_rejected():
    verdict = validate_descriptor(descriptor(name="photo.png", file_type="text/html"))
    assert not verdict.accepted
    assert verdict.reason == "Invalid file type text/html for extension .png"


def test_size_check_wins_over_extension_check():
    verdict = validate_descriptor(descriptor(name="part.xyz", size=MAX_FILE_SIZE + 1))
    assert "maximum allowed size" in verdict.reason


def test_validation_is_idempotent():
    samples = [
        descriptor(),
        descriptor(name="part.xyz"),
        descriptor(size=MAX_FILE_SIZE + 1),
        descriptor(name="photo.jpeg", file_type="image/gif"),
    ]
    for d in samples:
        assert validate_descriptor(d) == validate_descriptor(d)


def test_batch_verdicts_mirror_input_order():
    batch = [descriptor(name="a.pdf"), descriptor(name="b.exe"), descriptor(name="c.png", file_type="image/png")]
    verdicts = validate_batch(batch)
    assert [v.accepted for v in verdicts] == [True, False, True]


def test_extension_and_canonical_type_lookup():
    assert file_extension("assembly.v2.STEP") == ".step"
    assert file_extension("noext") is None
    assert canonical_content_type(descriptor(name="a.stp", file_type="application/octet-stream")) == "application/step"
    assert canonical_content_type(descriptor(name="a.jpg", file_type="image/jpeg")) == "image/jpeg"
    assert canonical_content_type(descriptor(name="a.unknown", file_type="x/y")) == "x/y"
