"""Read and write single ISO base media (MP4) boxes: trex, trun, vmhd, tx3g, vp09 and vpcC."""

__version__ = "0.1.0"