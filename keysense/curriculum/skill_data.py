"""
Year-one piano curriculum.

One hundred skill nodes in fifteen tiers, from finding Middle C to a full
performance set. Pure data module: the graph queries live in
``keysense.curriculum.skill_graph``.

Exercise ids follow the ``lesson-NN-ex-NN`` convention of the authored
content. Ids for lessons that are not authored yet are still listed so the
planner can fall back to AI generation for them.
"""

from __future__ import annotations

from keysense.curriculum.models import SkillCategory, SkillNode

# =============================================================================
# Skill Tree
# =============================================================================

SKILL_TREE: tuple[SkillNode, ...] = (
    # Tier 1: Note Finding (Lesson 1)
    SkillNode(
        "find-middle-c", "Find Middle C", SkillCategory.NOTE_FINDING,
        prerequisites=(),
        target_exercise_ids=("lesson-01-ex-01",),
        mastery_threshold=0.7, tier=1, required_completions=1,
        description="Locate and play Middle C (C4) on the keyboard",
    ),
    SkillNode(
        "keyboard-geography", "Keyboard Geography", SkillCategory.NOTE_FINDING,
        prerequisites=("find-middle-c",),
        target_exercise_ids=("lesson-01-ex-02",),
        mastery_threshold=0.7, tier=1, required_completions=1,
        description="Navigate the white keys around Middle C",
    ),
    SkillNode(
        "white-keys", "White Keys", SkillCategory.NOTE_FINDING,
        prerequisites=("keyboard-geography",),
        target_exercise_ids=("lesson-01-ex-03",),
        mastery_threshold=0.7, tier=1, required_completions=1,
        description="Play all white keys in the C4 octave",
    ),

    # Tier 2: Right Hand Melodies (Lesson 2)
    SkillNode(
        "rh-cde", "C-D-E Right Hand", SkillCategory.INTERVALS,
        prerequisites=("white-keys",),
        target_exercise_ids=("lesson-02-ex-01",),
        mastery_threshold=0.7, tier=2, required_completions=1,
        description="Play C-D-E ascending with right hand",
    ),
    SkillNode(
        "rh-cdefg", "C Position (C-G)", SkillCategory.INTERVALS,
        prerequisites=("rh-cde",),
        target_exercise_ids=("lesson-02-ex-02",),
        mastery_threshold=0.7, tier=2, required_completions=1,
        description="Play five-finger C position with right hand",
    ),
    SkillNode(
        "c-major-octave", "C Major Octave", SkillCategory.SCALES,
        prerequisites=("rh-cdefg",),
        target_exercise_ids=("lesson-02-ex-03",),
        mastery_threshold=0.7, tier=2, required_completions=1,
        description="Play the full C major scale ascending",
    ),
    SkillNode(
        "simple-melodies", "Simple Melodies", SkillCategory.SONGS,
        prerequisites=("rh-cdefg",),
        target_exercise_ids=("lesson-02-ex-04", "lesson-02-ex-06"),
        mastery_threshold=0.7, tier=2, required_completions=1,
        description="Play simple right-hand melodies (Mary, Twinkle)",
    ),
    SkillNode(
        "eighth-notes", "Eighth Notes", SkillCategory.RHYTHM,
        prerequisites=("rh-cde",),
        target_exercise_ids=("lesson-02-ex-07",),
        mastery_threshold=0.7, tier=2, required_completions=1,
        description="Play eighth-note rhythms accurately",
    ),
    SkillNode(
        "broken-chords-rh", "Broken Chords (RH)", SkillCategory.CHORDS,
        prerequisites=("rh-cdefg",),
        target_exercise_ids=("lesson-02-ex-05",),
        mastery_threshold=0.7, tier=2, required_completions=1,
        description="Play broken C chord with right hand",
    ),
    SkillNode(
        "c-position-review", "C Position Review", SkillCategory.INTERVALS,
        prerequisites=("c-major-octave", "eighth-notes"),
        target_exercise_ids=("lesson-02-ex-08",),
        mastery_threshold=0.8, tier=3, required_completions=1,
        description="Comprehensive C position review",
    ),

    # Tier 3: Left Hand Basics (Lesson 3)
    SkillNode(
        "lh-c-position", "Left Hand C Position", SkillCategory.NOTE_FINDING,
        prerequisites=("white-keys",),
        target_exercise_ids=("lesson-03-ex-01",),
        mastery_threshold=0.7, tier=3, required_completions=1,
        description="Play C position with left hand",
    ),
    SkillNode(
        "lh-scale-descending", "Left Hand Scale Down", SkillCategory.SCALES,
        prerequisites=("lh-c-position",),
        target_exercise_ids=("lesson-03-ex-02",),
        mastery_threshold=0.7, tier=3, required_completions=1,
        description="Play descending C major scale with left hand",
    ),
    SkillNode(
        "bass-notes", "Bass Notes", SkillCategory.NOTE_FINDING,
        prerequisites=("lh-c-position",),
        target_exercise_ids=("lesson-03-ex-03",),
        mastery_threshold=0.7, tier=3, required_completions=1,
        description="Play bass register notes with left hand",
    ),
    SkillNode(
        "broken-chords-lh", "Broken Chords (LH)", SkillCategory.CHORDS,
        prerequisites=("lh-scale-descending",),
        target_exercise_ids=("lesson-03-ex-04",),
        mastery_threshold=0.7, tier=3, required_completions=1,
        description="Play broken F chord with left hand",
    ),
    SkillNode(
        "steady-bass", "Steady Bass Pattern", SkillCategory.RHYTHM,
        prerequisites=("bass-notes",),
        target_exercise_ids=("lesson-03-ex-05",),
        mastery_threshold=0.7, tier=3, required_completions=1,
        description="Maintain a steady bass rhythm pattern",
    ),

    # Tier 4: Both Hands Together (Lesson 4)
    SkillNode(
        "hands-together-basic", "Hands Together Basic", SkillCategory.HAND_INDEPENDENCE,
        prerequisites=("c-position-review", "lh-scale-descending"),
        target_exercise_ids=("lesson-04-ex-01",),
        mastery_threshold=0.7, tier=4, required_completions=2,
        description="Play simple melody + bass simultaneously",
    ),
    SkillNode(
        "hands-melody-full", "Full Two-Hand Melody", SkillCategory.HAND_INDEPENDENCE,
        prerequisites=("hands-together-basic",),
        target_exercise_ids=("lesson-04-ex-02",),
        mastery_threshold=0.7, tier=4, required_completions=2,
        description="Play a full melody with both hands (Mary Had a Little Lamb)",
    ),
    SkillNode(
        "hand-independence-drill", "Hand Independence Drill", SkillCategory.HAND_INDEPENDENCE,
        prerequisites=("hands-together-basic",),
        target_exercise_ids=("lesson-04-ex-03",),
        mastery_threshold=0.75, tier=4, required_completions=2,
        description="Different rhythms in each hand simultaneously",
    ),
    SkillNode(
        "two-hand-songs", "Two-Hand Songs", SkillCategory.SONGS,
        prerequisites=("hands-melody-full",),
        target_exercise_ids=("lesson-04-ex-04",),
        mastery_threshold=0.7, tier=5, required_completions=2,
        description="Play arranged songs with both hands (Ode to Joy)",
    ),
    SkillNode(
        "blocked-chords", "Blocked Chords", SkillCategory.CHORDS,
        prerequisites=("broken-chords-rh", "broken-chords-lh"),
        target_exercise_ids=("lesson-04-ex-05",),
        mastery_threshold=0.7, tier=4, required_completions=2,
        description="Play C and F chords in blocked form",
    ),
    SkillNode(
        "both-hands-review", "Both Hands Review", SkillCategory.HAND_INDEPENDENCE,
        prerequisites=("hand-independence-drill", "blocked-chords"),
        target_exercise_ids=("lesson-04-ex-06",),
        mastery_threshold=0.8, tier=5, required_completions=2,
        description="Comprehensive both-hands review",
    ),

    # Tier 5: Scales & Technique (Lesson 5)
    SkillNode(
        "scale-technique", "Scale Technique", SkillCategory.SCALES,
        prerequisites=("c-major-octave", "lh-scale-descending"),
        target_exercise_ids=("lesson-05-ex-01",),
        mastery_threshold=0.75, tier=5, required_completions=2,
        description="Proper thumb-under technique for scales",
    ),
    SkillNode(
        "parallel-scales", "Parallel Scales", SkillCategory.SCALES,
        prerequisites=("scale-technique", "hands-together-basic"),
        target_exercise_ids=("lesson-05-ex-02",),
        mastery_threshold=0.75, tier=5, required_completions=2,
        description="Play scales in parallel motion with both hands",
    ),
    SkillNode(
        "scale-speed", "Scale Speed", SkillCategory.SCALES,
        prerequisites=("parallel-scales",),
        target_exercise_ids=("lesson-05-ex-03",),
        mastery_threshold=0.75, tier=6, required_completions=2,
        description="Increase scale speed while maintaining accuracy",
    ),
    SkillNode(
        "scale-review", "Scale Review", SkillCategory.SCALES,
        prerequisites=("scale-speed",),
        target_exercise_ids=("lesson-05-ex-04",),
        mastery_threshold=0.8, tier=6, required_completions=2,
        description="Comprehensive scale technique review",
    ),

    # Tier 6: Popular Songs (Lesson 6)
    SkillNode(
        "beginner-songs", "Beginner Songs", SkillCategory.SONGS,
        prerequisites=("both-hands-review",),
        target_exercise_ids=("lesson-06-ex-01", "lesson-06-ex-02"),
        mastery_threshold=0.7, tier=6, required_completions=2,
        description="Play well-known songs (Jingle Bells, Happy Birthday)",
    ),
    SkillNode(
        "intermediate-songs", "Intermediate Songs", SkillCategory.SONGS,
        prerequisites=("beginner-songs", "scale-technique"),
        target_exercise_ids=("lesson-06-ex-03", "lesson-06-ex-04"),
        mastery_threshold=0.75, tier=6, required_completions=2,
        description="Play more complex arrangements (Amazing Grace, Let It Go)",
    ),

    # Tier 7: Black Keys & Sharps/Flats (Lesson 7)
    SkillNode(
        "find-black-keys", "Find Black Keys", SkillCategory.BLACK_KEYS,
        prerequisites=("white-keys",),
        target_exercise_ids=("lesson-07-ex-01",),
        mastery_threshold=0.7, tier=7, required_completions=1,
        description="Locate groups of 2 and 3 black keys",
    ),
    SkillNode(
        "sharp-notes-rh", "Sharp Notes (RH)", SkillCategory.BLACK_KEYS,
        prerequisites=("find-black-keys", "rh-cdefg"),
        target_exercise_ids=("lesson-07-ex-02",),
        mastery_threshold=0.7, tier=7, required_completions=2,
        description="Play F#, C#, G# with right hand",
    ),
    SkillNode(
        "flat-notes-lh", "Flat Notes (LH)", SkillCategory.BLACK_KEYS,
        prerequisites=("find-black-keys", "lh-c-position"),
        target_exercise_ids=("lesson-07-ex-03",),
        mastery_threshold=0.7, tier=7, required_completions=2,
        description="Play Bb, Eb with left hand",
    ),
    SkillNode(
        "chromatic-scale", "Chromatic Scale", SkillCategory.BLACK_KEYS,
        prerequisites=("sharp-notes-rh", "flat-notes-lh"),
        target_exercise_ids=("lesson-07-ex-04",),
        mastery_threshold=0.7, tier=7, required_completions=2,
        description="Chromatic scale one octave ascending and descending",
    ),
    SkillNode(
        "half-steps-whole-steps", "Half & Whole Steps", SkillCategory.INTERVALS,
        prerequisites=("find-black-keys",),
        target_exercise_ids=("lesson-07-ex-05",),
        mastery_threshold=0.7, tier=7, required_completions=1,
        description="Distinguish half steps and whole steps by ear and touch",
    ),
    SkillNode(
        "black-key-melodies", "Black Key Melodies", SkillCategory.BLACK_KEYS,
        prerequisites=("chromatic-scale",),
        target_exercise_ids=("lesson-07-ex-06",),
        mastery_threshold=0.7, tier=7, required_completions=2,
        description="Simple melodies using sharps and flats",
    ),

    # Tier 8: G Major & F Major (Lessons 8-9)
    SkillNode(
        "g-major-scale-rh", "G Major Scale (RH)", SkillCategory.KEY_SIGNATURES,
        prerequisites=("half-steps-whole-steps", "scale-technique"),
        target_exercise_ids=("lesson-08-ex-01",),
        mastery_threshold=0.75, tier=8, required_completions=2,
        description="G major scale right hand with F#",
    ),
    SkillNode(
        "g-major-scale-lh", "G Major Scale (LH)", SkillCategory.KEY_SIGNATURES,
        prerequisites=("g-major-scale-rh", "lh-scale-descending"),
        target_exercise_ids=("lesson-08-ex-02",),
        mastery_threshold=0.75, tier=8, required_completions=2,
        description="G major scale left hand",
    ),
    SkillNode(
        "g-major-hands", "G Major Both Hands", SkillCategory.KEY_SIGNATURES,
        prerequisites=("g-major-scale-lh", "hands-together-basic"),
        target_exercise_ids=("lesson-08-ex-03",),
        mastery_threshold=0.75, tier=8, required_completions=3,
        description="G major scale both hands together",
    ),
    SkillNode(
        "g-major-melodies", "G Major Melodies", SkillCategory.KEY_SIGNATURES,
        prerequisites=("g-major-scale-rh",),
        target_exercise_ids=("lesson-08-ex-04", "lesson-08-ex-05"),
        mastery_threshold=0.7, tier=8, required_completions=2,
        description="Melodies in G major",
    ),
    SkillNode(
        "f-major-scale-rh", "F Major Scale (RH)", SkillCategory.KEY_SIGNATURES,
        prerequisites=("half-steps-whole-steps", "scale-technique"),
        target_exercise_ids=("lesson-09-ex-01",),
        mastery_threshold=0.75, tier=8, required_completions=2,
        description="F major scale right hand with Bb",
    ),
    SkillNode(
        "f-major-scale-lh", "F Major Scale (LH)", SkillCategory.KEY_SIGNATURES,
        prerequisites=("f-major-scale-rh", "lh-scale-descending"),
        target_exercise_ids=("lesson-09-ex-02",),
        mastery_threshold=0.75, tier=8, required_completions=2,
        description="F major scale left hand",
    ),
    SkillNode(
        "f-major-hands", "F Major Both Hands", SkillCategory.KEY_SIGNATURES,
        prerequisites=("f-major-scale-lh", "hands-together-basic"),
        target_exercise_ids=("lesson-09-ex-03",),
        mastery_threshold=0.75, tier=8, required_completions=3,
        description="F major scale both hands together",
    ),
    SkillNode(
        "key-signature-reading", "Key Signature Reading", SkillCategory.KEY_SIGNATURES,
        prerequisites=("g-major-melodies", "f-major-scale-rh"),
        target_exercise_ids=("lesson-09-ex-04", "lesson-09-ex-05"),
        mastery_threshold=0.7, tier=8, required_completions=2,
        description="Identify C, G, F major by key signature pattern",
    ),

    # Tier 9: Minor Keys (Lessons 10-11)
    SkillNode(
        "a-minor-natural", "A Natural Minor", SkillCategory.SCALES,
        prerequisites=("scale-technique", "key-signature-reading"),
        target_exercise_ids=("lesson-10-ex-01",),
        mastery_threshold=0.75, tier=9, required_completions=2,
        description="A natural minor scale (all white keys)",
    ),
    SkillNode(
        "a-minor-melodies", "A Minor Melodies", SkillCategory.SONGS,
        prerequisites=("a-minor-natural",),
        target_exercise_ids=("lesson-10-ex-02", "lesson-10-ex-03"),
        mastery_threshold=0.7, tier=9, required_completions=2,
        description="Melodies in A minor",
    ),
    SkillNode(
        "d-minor-scale", "D Minor Scale", SkillCategory.SCALES,
        prerequisites=("a-minor-natural", "flat-notes-lh"),
        target_exercise_ids=("lesson-11-ex-01",),
        mastery_threshold=0.75, tier=9, required_completions=2,
        description="D natural minor scale with Bb",
    ),
    SkillNode(
        "d-minor-melodies", "D Minor Melodies", SkillCategory.SONGS,
        prerequisites=("d-minor-scale",),
        target_exercise_ids=("lesson-11-ex-02",),
        mastery_threshold=0.7, tier=9, required_completions=2,
        description="Melodies in D minor",
    ),
    SkillNode(
        "e-minor-scale", "E Minor Scale", SkillCategory.SCALES,
        prerequisites=("a-minor-natural", "sharp-notes-rh"),
        target_exercise_ids=("lesson-11-ex-03",),
        mastery_threshold=0.75, tier=9, required_completions=2,
        description="E natural minor scale with F#",
    ),
    SkillNode(
        "minor-vs-major", "Minor vs Major", SkillCategory.INTERVALS,
        prerequisites=("a-minor-melodies",),
        target_exercise_ids=("lesson-10-ex-04",),
        mastery_threshold=0.7, tier=9, required_completions=1,
        description="Compare major and minor tonality by ear",
    ),
    SkillNode(
        "harmonic-minor", "Harmonic Minor", SkillCategory.SCALES,
        prerequisites=("a-minor-natural", "sharp-notes-rh"),
        target_exercise_ids=("lesson-10-ex-05",),
        mastery_threshold=0.75, tier=9, required_completions=2,
        description="A harmonic minor scale with raised G#",
    ),
    SkillNode(
        "minor-songs", "Minor Key Songs", SkillCategory.SONGS,
        prerequisites=("a-minor-melodies", "d-minor-melodies"),
        target_exercise_ids=("lesson-11-ex-04", "lesson-11-ex-05"),
        mastery_threshold=0.7, tier=9, required_completions=2,
        description="Songs in minor keys",
    ),

    # Tier 10: Chord Progressions (Lessons 13-15)
    SkillNode(
        "major-triads-root", "Major Triads (Root)", SkillCategory.CHORDS,
        prerequisites=("blocked-chords", "key-signature-reading"),
        target_exercise_ids=("lesson-13-ex-01",),
        mastery_threshold=0.75, tier=10, required_completions=3,
        description="Play C, F, G root position major triads",
    ),
    SkillNode(
        "minor-triads", "Minor Triads", SkillCategory.CHORDS,
        prerequisites=("major-triads-root", "a-minor-natural"),
        target_exercise_ids=("lesson-13-ex-02",),
        mastery_threshold=0.75, tier=10, required_completions=3,
        description="Play Am, Dm, Em minor triads",
    ),
    SkillNode(
        "chord-inversions-intro", "Chord Inversions", SkillCategory.CHORDS,
        prerequisites=("major-triads-root",),
        target_exercise_ids=("lesson-13-ex-03",),
        mastery_threshold=0.75, tier=10, required_completions=3,
        description="First inversion of major and minor triads",
    ),
    SkillNode(
        "progression-i-iv-v", "I-IV-V Progression", SkillCategory.CHORDS,
        prerequisites=("major-triads-root",),
        target_exercise_ids=("lesson-13-ex-04", "lesson-14-ex-01"),
        mastery_threshold=0.75, tier=10, required_completions=3,
        description="Classic I-IV-V chord progression in C major",
    ),
    SkillNode(
        "progression-i-vi-iv-v", "I-vi-IV-V Progression", SkillCategory.CHORDS,
        prerequisites=("progression-i-iv-v", "minor-triads"),
        target_exercise_ids=("lesson-14-ex-02",),
        mastery_threshold=0.75, tier=10, required_completions=3,
        description="Classic 50s doo-wop progression",
    ),
    SkillNode(
        "progression-i-v-vi-iv", "I-V-vi-IV (Axis)", SkillCategory.CHORDS,
        prerequisites=("progression-i-iv-v", "minor-triads"),
        target_exercise_ids=("lesson-14-ex-03",),
        mastery_threshold=0.75, tier=10, required_completions=3,
        description='Modern pop "Axis" progression',
    ),
    SkillNode(
        "bass-chord-pattern", "Bass-Chord Pattern", SkillCategory.HAND_INDEPENDENCE,
        prerequisites=("progression-i-iv-v", "steady-bass"),
        target_exercise_ids=("lesson-14-ex-04",),
        mastery_threshold=0.75, tier=10, required_completions=3,
        description="Left hand broken chord accompaniment pattern",
    ),
    SkillNode(
        "alberti-bass", "Alberti Bass", SkillCategory.HAND_INDEPENDENCE,
        prerequisites=("bass-chord-pattern",),
        target_exercise_ids=("lesson-14-ex-05",),
        mastery_threshold=0.75, tier=10, required_completions=3,
        description="Alberti bass pattern (C-G-E-G)",
    ),
    SkillNode(
        "chord-songs", "Chord Songs", SkillCategory.SONGS,
        prerequisites=("progression-i-v-vi-iv", "bass-chord-pattern"),
        target_exercise_ids=("lesson-15-ex-01", "lesson-15-ex-02"),
        mastery_threshold=0.7, tier=10, required_completions=3,
        description="Songs with chord accompaniment",
    ),
    SkillNode(
        "chord-transitions", "Chord Transitions", SkillCategory.CHORDS,
        prerequisites=("chord-inversions-intro", "progression-i-vi-iv-v"),
        target_exercise_ids=("lesson-15-ex-03", "lesson-15-ex-04", "lesson-15-ex-05"),
        mastery_threshold=0.75, tier=10, required_completions=3,
        description="Smooth voice-leading transitions between chords",
    ),

    # Tier 11: Advanced Rhythm (Lessons 16-18)
    SkillNode(
        "dotted-quarter-notes", "Dotted Quarters", SkillCategory.RHYTHM,
        prerequisites=("eighth-notes", "key-signature-reading"),
        target_exercise_ids=("lesson-16-ex-01",),
        mastery_threshold=0.75, tier=11, required_completions=2,
        description="Dotted quarter note rhythms (1.5 beats)",
    ),
    SkillNode(
        "syncopation-intro", "Syncopation", SkillCategory.RHYTHM,
        prerequisites=("dotted-quarter-notes",),
        target_exercise_ids=("lesson-16-ex-02", "lesson-16-ex-03"),
        mastery_threshold=0.75, tier=11, required_completions=3,
        description="Off-beat accents and syncopated rhythms",
    ),
    SkillNode(
        "triplet-rhythm", "Triplets", SkillCategory.RHYTHM,
        prerequisites=("eighth-notes",),
        target_exercise_ids=("lesson-17-ex-01",),
        mastery_threshold=0.75, tier=11, required_completions=3,
        description="Triplet eighth note rhythms",
    ),
    SkillNode(
        "3-4-time", "3/4 Time (Waltz)", SkillCategory.RHYTHM,
        prerequisites=("dotted-quarter-notes",),
        target_exercise_ids=("lesson-17-ex-02", "lesson-17-ex-03"),
        mastery_threshold=0.75, tier=11, required_completions=2,
        description="Waltz time: three beats per measure",
    ),
    SkillNode(
        "6-8-time", "6/8 Time", SkillCategory.RHYTHM,
        prerequisites=("triplet-rhythm",),
        target_exercise_ids=("lesson-17-ex-04",),
        mastery_threshold=0.75, tier=11, required_completions=3,
        description="Compound meter: two groups of three",
    ),
    SkillNode(
        "ties-across-barline", "Tied Notes", SkillCategory.RHYTHM,
        prerequisites=("syncopation-intro",),
        target_exercise_ids=("lesson-16-ex-04",),
        mastery_threshold=0.7, tier=11, required_completions=2,
        description="Notes tied across bar lines",
    ),
    SkillNode(
        "swing-rhythm", "Swing Feel", SkillCategory.RHYTHM,
        prerequisites=("triplet-rhythm", "syncopation-intro"),
        target_exercise_ids=("lesson-18-ex-01",),
        mastery_threshold=0.75, tier=11, required_completions=3,
        description="Swing eighth notes (long-short feel)",
    ),
    SkillNode(
        "rhythm-reading", "Rhythm Reading", SkillCategory.RHYTHM,
        prerequisites=("3-4-time", "6-8-time"),
        target_exercise_ids=("lesson-18-ex-02", "lesson-18-ex-03"),
        mastery_threshold=0.75, tier=11, required_completions=2,
        description="Clap and play written rhythms accurately",
    ),
    SkillNode(
        "mixed-rhythms", "Mixed Rhythms", SkillCategory.RHYTHM,
        prerequisites=("rhythm-reading", "swing-rhythm", "ties-across-barline"),
        target_exercise_ids=("lesson-18-ex-04", "lesson-18-ex-05"),
        mastery_threshold=0.8, tier=11, required_completions=3,
        description="Combining all rhythm types in one exercise",
    ),

    # Tier 12: Arpeggios & Patterns (Lesson 19)
    SkillNode(
        "c-major-arpeggio", "C Major Arpeggio", SkillCategory.ARPEGGIOS,
        prerequisites=("scale-review", "chord-inversions-intro"),
        target_exercise_ids=("lesson-19-ex-01",),
        mastery_threshold=0.75, tier=12, required_completions=3,
        description="C major arpeggio across 2 octaves",
    ),
    SkillNode(
        "g-major-arpeggio", "G Major Arpeggio", SkillCategory.ARPEGGIOS,
        prerequisites=("c-major-arpeggio", "g-major-scale-rh"),
        target_exercise_ids=("lesson-19-ex-02",),
        mastery_threshold=0.75, tier=12, required_completions=3,
        description="G major arpeggio across 2 octaves",
    ),
    SkillNode(
        "minor-arpeggios", "Minor Arpeggios", SkillCategory.ARPEGGIOS,
        prerequisites=("c-major-arpeggio", "a-minor-natural"),
        target_exercise_ids=("lesson-19-ex-03",),
        mastery_threshold=0.75, tier=12, required_completions=3,
        description="Am, Dm arpeggios",
    ),
    SkillNode(
        "arpeggio-patterns", "Arpeggio Patterns", SkillCategory.ARPEGGIOS,
        prerequisites=("c-major-arpeggio",),
        target_exercise_ids=("lesson-19-ex-04",),
        mastery_threshold=0.75, tier=12, required_completions=3,
        description="Accomp patterns (1-3-5-8)",
    ),
    SkillNode(
        "broken-chord-patterns", "Broken Chord Patterns", SkillCategory.ARPEGGIOS,
        prerequisites=("alberti-bass", "arpeggio-patterns"),
        target_exercise_ids=("lesson-19-ex-05",),
        mastery_threshold=0.75, tier=12, required_completions=3,
        description="Waltz bass and stride patterns",
    ),
    SkillNode(
        "hands-arpeggio", "Arpeggios Both Hands", SkillCategory.ARPEGGIOS,
        prerequisites=("g-major-arpeggio", "minor-arpeggios"),
        target_exercise_ids=("lesson-19-ex-06",),
        mastery_threshold=0.8, tier=12, required_completions=3,
        description="Arpeggios both hands in parallel motion",
    ),
    SkillNode(
        "arpeggio-songs", "Arpeggio Songs", SkillCategory.SONGS,
        prerequisites=("broken-chord-patterns", "hands-arpeggio"),
        target_exercise_ids=("lesson-19-ex-07",),
        mastery_threshold=0.7, tier=12, required_completions=3,
        description="Songs using arpeggio patterns",
    ),

    # Tier 13: Expression & Dynamics (Lesson 20)
    SkillNode(
        "dynamics-p-f", "Piano & Forte", SkillCategory.EXPRESSION,
        prerequisites=("intermediate-songs",),
        target_exercise_ids=("lesson-20-ex-01",),
        mastery_threshold=0.7, tier=13, required_completions=2,
        description="Play piano (soft) and forte (loud)",
    ),
    SkillNode(
        "crescendo-diminuendo", "Crescendo & Diminuendo", SkillCategory.EXPRESSION,
        prerequisites=("dynamics-p-f",),
        target_exercise_ids=("lesson-20-ex-02",),
        mastery_threshold=0.7, tier=13, required_completions=2,
        description="Gradual volume swells and fades",
    ),
    SkillNode(
        "staccato-technique", "Staccato", SkillCategory.EXPRESSION,
        prerequisites=("dynamics-p-f",),
        target_exercise_ids=("lesson-20-ex-03",),
        mastery_threshold=0.75, tier=13, required_completions=2,
        description="Short detached notes",
    ),
    SkillNode(
        "legato-technique", "Legato", SkillCategory.EXPRESSION,
        prerequisites=("dynamics-p-f",),
        target_exercise_ids=("lesson-20-ex-04",),
        mastery_threshold=0.75, tier=13, required_completions=2,
        description="Smooth connected playing",
    ),
    SkillNode(
        "accents-emphasis", "Accents", SkillCategory.EXPRESSION,
        prerequisites=("staccato-technique", "syncopation-intro"),
        target_exercise_ids=("lesson-20-ex-05",),
        mastery_threshold=0.7, tier=13, required_completions=2,
        description="Emphasizing individual notes within a phrase",
    ),
    SkillNode(
        "pedal-intro", "Sustain Pedal", SkillCategory.EXPRESSION,
        prerequisites=("legato-technique", "chord-transitions"),
        target_exercise_ids=("lesson-20-ex-06",),
        mastery_threshold=0.7, tier=13, required_completions=2,
        description="Basic sustain pedal technique",
    ),
    SkillNode(
        "phrasing", "Musical Phrasing", SkillCategory.EXPRESSION,
        prerequisites=("crescendo-diminuendo", "legato-technique"),
        target_exercise_ids=("lesson-20-ex-07",),
        mastery_threshold=0.75, tier=13, required_completions=3,
        description="Shaping musical phrases with dynamics and breathing",
    ),
    SkillNode(
        "expressive-songs", "Expressive Songs", SkillCategory.SONGS,
        prerequisites=("phrasing", "pedal-intro"),
        target_exercise_ids=("lesson-20-ex-08",),
        mastery_threshold=0.7, tier=13, required_completions=3,
        description="Songs with dynamic markings",
    ),

    # Tier 14: More Keys & Sight Reading (Lessons 21-22)
    SkillNode(
        "d-major-scale", "D Major Scale", SkillCategory.KEY_SIGNATURES,
        prerequisites=("g-major-hands", "sharp-notes-rh"),
        target_exercise_ids=("lesson-21-ex-01", "lesson-21-ex-02"),
        mastery_threshold=0.75, tier=14, required_completions=3,
        description="D major scale with 2 sharps (F#, C#)",
    ),
    SkillNode(
        "bb-major-scale", "Bb Major Scale", SkillCategory.KEY_SIGNATURES,
        prerequisites=("f-major-hands", "flat-notes-lh"),
        target_exercise_ids=("lesson-21-ex-03", "lesson-21-ex-04"),
        mastery_threshold=0.75, tier=14, required_completions=3,
        description="Bb major scale with 2 flats (Bb, Eb)",
    ),
    SkillNode(
        "relative-minor", "Relative Minor", SkillCategory.KEY_SIGNATURES,
        prerequisites=("a-minor-natural", "key-signature-reading"),
        target_exercise_ids=("lesson-21-ex-05",),
        mastery_threshold=0.7, tier=14, required_completions=2,
        description="Find the relative minor of any major key",
    ),
    SkillNode(
        "sight-reading-c", "Sight Reading (C)", SkillCategory.SIGHT_READING,
        prerequisites=("scale-review", "rhythm-reading"),
        target_exercise_ids=("lesson-22-ex-01", "lesson-22-ex-02"),
        mastery_threshold=0.7, tier=14, required_completions=3,
        description="Read and play C major melodies at sight",
    ),
    SkillNode(
        "sight-reading-g", "Sight Reading (G)", SkillCategory.SIGHT_READING,
        prerequisites=("sight-reading-c", "g-major-melodies"),
        target_exercise_ids=("lesson-22-ex-03",),
        mastery_threshold=0.7, tier=14, required_completions=3,
        description="Read and play G major melodies at sight",
    ),
    SkillNode(
        "sight-reading-mixed", "Sight Reading (Mixed)", SkillCategory.SIGHT_READING,
        prerequisites=("sight-reading-g", "f-major-hands"),
        target_exercise_ids=("lesson-22-ex-04",),
        mastery_threshold=0.75, tier=14, required_completions=3,
        description="Mixed-key sight reading exercises",
    ),
    SkillNode(
        "interval-recognition", "Interval Recognition", SkillCategory.INTERVALS,
        prerequisites=("minor-vs-major", "sight-reading-c"),
        target_exercise_ids=("lesson-22-ex-05",),
        mastery_threshold=0.7, tier=14, required_completions=2,
        description="Identify 2nds, 3rds, 5ths, octaves by ear and on page",
    ),
    SkillNode(
        "key-fluency", "Key Fluency", SkillCategory.KEY_SIGNATURES,
        prerequisites=("d-major-scale", "bb-major-scale", "relative-minor"),
        target_exercise_ids=("lesson-12-ex-01", "lesson-12-ex-02", "lesson-12-ex-03"),
        mastery_threshold=0.75, tier=14, required_completions=3,
        description="Quick key identification and modulation",
    ),

    # Tier 15: Performance & Intermediate Repertoire (Lessons 23-24)
    SkillNode(
        "performance-prep", "Performance Prep", SkillCategory.EXPRESSION,
        prerequisites=("expressive-songs", "sight-reading-mixed"),
        target_exercise_ids=("lesson-23-ex-01",),
        mastery_threshold=0.75, tier=15, required_completions=3,
        description="Playing through without stopping, performance mindset",
    ),
    SkillNode(
        "rubato-intro", "Rubato", SkillCategory.EXPRESSION,
        prerequisites=("phrasing", "performance-prep"),
        target_exercise_ids=("lesson-23-ex-02",),
        mastery_threshold=0.7, tier=15, required_completions=3,
        description="Expressive timing flexibility",
    ),
    SkillNode(
        "intermediate-classical", "Classical Pieces", SkillCategory.SONGS,
        prerequisites=("performance-prep", "arpeggio-songs"),
        target_exercise_ids=("lesson-23-ex-03",),
        mastery_threshold=0.75, tier=15, required_completions=3,
        description="Minuet in G, Fur Elise intro",
    ),
    SkillNode(
        "intermediate-pop", "Pop Arrangements", SkillCategory.SONGS,
        prerequisites=("performance-prep", "chord-songs"),
        target_exercise_ids=("lesson-23-ex-04",),
        mastery_threshold=0.75, tier=15, required_completions=3,
        description="Let It Be, Imagine intro arrangements",
    ),
    SkillNode(
        "blues-scale", "Blues Scale", SkillCategory.SCALES,
        prerequisites=("chromatic-scale", "swing-rhythm"),
        target_exercise_ids=("lesson-23-ex-05",),
        mastery_threshold=0.75, tier=15, required_completions=3,
        description="Blues scale and basic improvisation",
    ),
    SkillNode(
        "full-piece-classical", "Classical Performance", SkillCategory.SONGS,
        prerequisites=("intermediate-classical", "rubato-intro"),
        target_exercise_ids=("lesson-24-ex-01", "lesson-24-ex-02"),
        mastery_threshold=0.8, tier=15, required_completions=5,
        description="Complete classical piece performance",
    ),
    SkillNode(
        "full-piece-pop", "Pop Performance", SkillCategory.SONGS,
        prerequisites=("intermediate-pop", "pedal-intro"),
        target_exercise_ids=("lesson-24-ex-03",),
        mastery_threshold=0.8, tier=15, required_completions=5,
        description="Complete pop song arrangement",
    ),
    SkillNode(
        "repertoire-building", "Repertoire Building", SkillCategory.SONGS,
        prerequisites=("full-piece-classical", "full-piece-pop", "blues-scale"),
        target_exercise_ids=("lesson-24-ex-04",),
        mastery_threshold=0.75, tier=15, required_completions=5,
        description="Building a performance set of 3+ pieces",
    ),
    SkillNode(
        "year-one-mastery", "Year One Mastery", SkillCategory.SONGS,
        prerequisites=("repertoire-building", "key-fluency", "mixed-rhythms"),
        target_exercise_ids=("lesson-24-ex-05",),
        mastery_threshold=0.8, tier=15, required_completions=5,
        description="Comprehensive review of all Year One skills",
    ),
)
