# wallefmt

Read and write the binary object formats used by the WALL-E game data
archives. Each object is a header and a body. `wallefmt` turns them into an
editable `object.json` and, for some formats, a companion file. It packs
them back into bytes. The package has no dependencies beyond the standard
library.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Usage

Formats are looked up by the object's class CRC32 for a given archive
version:

```python
from pathlib import Path
from wallefmt.registry import get_formats

formats = get_formats("v1.291.03.06 - Asobo Studio - Internal Cross Technology")
fmt = formats[4240844041]  # camera objects

out_dir = Path("camera.d")
out_dir.mkdir(exist_ok=True)
links = fmt.unpack(header_bytes, body_bytes, out_dir)
print(links.hard_links, links.soft_links)

packed = fmt.pack(out_dir)
packed.header, packed.body, packed.hard_links, packed.soft_links
```

### Versions

`get_formats` accepts the two version strings listed in
`wallefmt.registry.SUPPORTED_VERSIONS`:

- `v1.291.03.06 - Asobo Studio - Internal Cross Technology`
- `v1.291.03.07 - Asobo Studio - Internal Cross Technology`

Both versions return the same set of formats. Any other string raises
`ValueError`.

### Unpacking and packing

`unpack(header, body, output_path)` writes `object.json` and any companion
file into an existing directory. It returns a `Links` named tuple, which
holds `hard_links` and `soft_links`: the CRC32s that the object refers to.

`pack(input_path)` reads that directory back. It returns a frozen
`PackedObject` dataclass with `header`, `body`, `hard_links` and
`soft_links`.

Most formats are `wallefmt.common.HeaderBodyFormat` instances. They store a
single `object.json` with `header` and `body` members. The other formats
are listed below.

| Format | `object.json` keys | Companion file |
| --- | --- | --- |
| `wallefmt.rawdata.BinaryObjectFormat` | `resource_object` | `data.bin`, the body as is |
| `wallefmt.rawdata.UserDefineObjectFormat` | `resource_object` | `data.txt`, the length-prefixed text |
| `wallefmt.sound.SoundObjectFormat` | `sound_header` | `data.wav`, mono 16-bit PCM |
| `wallefmt.bitmap.BitmapObjectFormat` | `bitmap_header`, `bitmap` | `data.dds`, DXT1 or DXT5 |
| `wallefmt.mesh.MeshObjectFormat` | `mesh_header`, `mesh` | `data.obj`, Wavefront OBJ, written only |
| `wallefmt.skin.SkinObjectFormat` | `skin_header`, `skin` | none |

A sound header with a sample rate of zero is written to WAV at 22050 Hz.
Packing a sound needs a 16-bit WAV file.

Bytes or JSON that do not match the expected layout raise
`wallefmt.schema.ParseError`, which is a `ValueError`.

### Individual formats

Each format can also be built on its own. These factory functions each
return a `HeaderBodyFormat`:

| Module | Functions |
| --- | --- |
| `wallefmt.simple` | `camera_format`, `collision_vol_format`, `light_data_format`, `mesh_data_format`, `omni_format`, `surface_datas_format`, `warp_format` |
| `wallefmt.animation` | `animation_format`, `material_anim_format`, `material_obj_format` |
| `wallefmt.assets` | `fonts_format`, `game_obj_format`, `material_format`, `particles_data_format` |
| `wallefmt.geometry` | `gen_world_format`, `gw_road_format`, `spline_format`, `spline_graph_format`, `rot_shape_format`, `rot_shape_data_format` |
| `wallefmt.lod` | `lod_format`, `lod_format_alt`, `lod_format_alt_alt`, `lod_data_format` |
| `wallefmt.node` | `node_format`, `node_format_alt` |
| `wallefmt.particles` | `particles_format`, `particles_format_alt` |
| `wallefmt.skel` | `skel_format` |
| `wallefmt.rtc` | `rtc_format` |
| `wallefmt.surface` | `surface_format` |
| `wallefmt.world` | `world_format`, `world_ref_format` |

The `*_alt` layouts are not part of `get_formats`. Use them directly when
needed.

### Helpers

- `wallefmt.mesh.write_obj(mesh, out)` writes the vertices, UVs, normals and
  triangles of a decoded mesh to a text stream.
- `wallefmt.bitmap.build_dds(width, height, four_cc, data)` builds a DDS
  file.
- `wallefmt.bitmap.read_dds(data)` returns a `DdsImage` with `width`,
  `height`, `four_cc` and `data`.
- `wallefmt.common.read_object_json` and `write_object_json` load and save
  `object.json` in a directory.

### Layouts

Structures are described declaratively with the field types in
`wallefmt.schema`:

- `Scalar`
- `FixedVec`
- `PascalArray`
- `PascalString`
- `PascalStringNull`
- `FixedStringNull`
- `NumeratorFloat`
- `VertexVectorComponent`
- `Optional`
- `Hidden`
- `Struct`

`Struct.decode` and `Struct.encode` convert between bytes and plain
dictionaries. `Struct.to_json` and `Struct.from_json` convert those
dictionaries to and from their JSON form. `Struct.hard_links` and
`Struct.soft_links` report the CRC32s that a value refers to.

## What it does not do

- There is no command-line tool.
- It does not read or write the archive files themselves. It works only on
  the header and body bytes of one object at a time.
- The `data.obj` written for meshes is an export only. Packing a mesh reads
  `object.json` alone, so geometry edits must be made there.