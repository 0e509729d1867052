"""Read-only queries on a hierarchy of reconstructed particles.

The PID network uses the number of track-like and shower-like children of a
particle, as well as its number of grandchildren, as auxiliary variables.
"""

from trackpid.utils.globals import SHOWR_SHP

__all__ = ["ParticleHierarchy"]


class ParticleHierarchy:
    """Provides the parentage information of a set of particles.

    The hierarchy is never modified by the queries, so that one instance
    can be shared by every track of an event.
    """

    def __init__(self, particles):
        """Index the particles by their ID.

        Parameters
        ----------
        particles : List[Particle]
            List of particles in one event
        """
        self._particles = {}
        for part in particles:
            if part.id in self._particles:
                raise ValueError(f"Duplicate particle ID in the hierarchy: {part.id}")
            self._particles[part.id] = part

    def __len__(self):
        """Number of particles in the hierarchy."""
        return len(self._particles)

    def __contains__(self, particle_id):
        """Whether a particle ID is in the hierarchy."""
        return particle_id in self._particles

    def __getitem__(self, particle_id):
        """Fetch a particle by ID.

        Parameters
        ----------
        particle_id : int
            Particle ID

        Returns
        -------
        Particle
            Particle object
        """
        if particle_id not in self._particles:
            raise KeyError(f"Particle {particle_id} is not in the hierarchy.")

        return self._particles[particle_id]

    def is_track(self, particle_id):
        """Checks whether a particle is track-like."""
        return self[particle_id].is_track

    def is_shower(self, particle_id):
        """Checks whether a particle is shower-like."""
        return self[particle_id].shape == SHOWR_SHP

    def children(self, particle_id):
        """Fetch the direct children of a particle.

        Children IDs which are not in the hierarchy are ignored.

        Parameters
        ----------
        particle_id : int
            Particle ID

        Returns
        -------
        List[Particle]
            List of children particles
        """
        return [
            self._particles[c]
            for c in self[particle_id].children_id
            if c in self._particles
        ]

    def topology_counts(self, particle_id):
        """Count the children of a particle by type, and its grandchildren.

        Parameters
        ----------
        particle_id : int
            Particle ID

        Returns
        -------
        int
            Number of track-like children
        int
            Number of shower-like children
        int
            Number of grandchildren
        """
        num_track, num_shower, num_grand = 0, 0, 0
        for child in self.children(particle_id):
            num_track += child.is_track
            num_shower += child.shape == SHOWR_SHP
            num_grand += child.num_children

        return num_track, num_shower, num_grand
