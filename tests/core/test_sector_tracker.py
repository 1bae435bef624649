from acc_core.application.sector_tracker import DEFAULT_SECTOR_COUNT, SectorTracker


def test_add_sector_subtracts_previous_durations():
    tracker = SectorTracker(3)
    tracker.add_sector(12000)
    tracker.add_sector(21000)
    assert tracker.sector_times == [12000, 9000, 0]

    assert tracker.add_sector(25000) == 4000
    assert tracker.sector_times == [12000, 9000, 4000]
    assert tracker.lap_complete


def test_add_sector_after_missed_lap_boundary_starts_over():
    tracker = SectorTracker(2)
    tracker.add_sector(30000)
    tracker.add_sector(61000)
    assert tracker.add_sector(29500) == 29500
    assert tracker.cursor == 1


def test_set_sector_count_reallocates_and_resets():
    tracker = SectorTracker(3)
    tracker.add_sector(12000)
    tracker.set_sector_count(4)
    assert tracker.sector_count == 4
    assert tracker.cursor == 0
    assert tracker.sector_times == [0, 0, 0, 0]


def test_invalid_sector_count_falls_back_to_default():
    tracker = SectorTracker(0)
    assert tracker.sector_count == DEFAULT_SECTOR_COUNT
    tracker.set_sector_count(-1)
    assert tracker.sector_count == DEFAULT_SECTOR_COUNT


def test_record_in_sequence():
    tracker = SectorTracker(3)
    assert tracker.record(0, 30000) == 30000
    assert tracker.record(1, 61000) == 31000
    assert tracker.record(2, 92500) == 31500
    tracker.reset()
    assert tracker.cursor == 0


def test_record_resyncs_when_joining_mid_lap():
    tracker = SectorTracker(3)
    # first observed boundary is the end of sector 1
    assert tracker.record(1, 61000) is None
    assert tracker.cursor == 2
    # the next duration is still correct
    assert tracker.record(2, 92000) == 31000


def test_record_ignores_out_of_range_index():
    tracker = SectorTracker(3)
    assert tracker.record(5, 10000) is None
    assert tracker.cursor == 0


def test_record_resync_at_first_sector_reports_the_reading():
    tracker = SectorTracker(3)
    tracker.record(0, 30000)
    tracker.record(1, 61000)
    # boundary of sector 2 was missed, the next lap's first sector arrives
    assert tracker.record(0, 29800) == 29800
    assert tracker.cursor == 1
    assert tracker.sector_times == [29800, 0, 0]
